"""Domain-Oriented Observability for the authoring application layer.

Probes for application service operations following Domain-Oriented Observability patterns.
"""

from authoring.application.observability.authoring_service_probe import (
    AuthoringServiceProbe,
    DefaultAuthoringServiceProbe,
)
from authoring.application.observability.project_service_probe import (
    DefaultProjectServiceProbe,
    ProjectServiceProbe,
)

__all__ = [
    "AuthoringServiceProbe",
    "DefaultAuthoringServiceProbe",
    "ProjectServiceProbe",
    "DefaultProjectServiceProbe",
]
