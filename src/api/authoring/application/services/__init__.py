"""Application services for the authoring bounded context.

Application services run each authoring operation as one unit of work
over the repositories and the sequence store. They are the "front door"
to the authoring context.
"""

from authoring.application.services.authoring_service import AuthoringService
from authoring.application.services.project_service import ProjectService

__all__ = [
    "AuthoringService",
    "ProjectService",
]
