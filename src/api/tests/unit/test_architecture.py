"""Architecture tests using pytest-archon.

These tests enforce DDD architectural boundaries between layers
within the authoring bounded context.
"""

from pytest_archon import archrule


class TestAuthoringDomainLayerBoundaries:
    """Tests that the domain layer has no forbidden dependencies."""

    def test_domain_does_not_import_infrastructure(self):
        """Domain layer should not depend on infrastructure.

        Identifier composition and slugs are pure functions and must not
        know about SQLAlchemy models or sessions.
        """
        (
            archrule("domain_no_infrastructure")
            .match("authoring.domain*")
            .should_not_import("authoring.infrastructure*", "infrastructure*")
            .check("authoring")
        )

    def test_domain_does_not_import_application(self):
        (
            archrule("domain_no_application")
            .match("authoring.domain*")
            .should_not_import("authoring.application*")
            .check("authoring")
        )

    def test_domain_does_not_import_sqlalchemy(self):
        (
            archrule("domain_no_sqlalchemy")
            .match("authoring.domain*")
            .should_not_import("sqlalchemy*")
            .check("authoring")
        )


class TestAuthoringPortsLayerBoundaries:
    """Tests that the ports layer has no forbidden dependencies."""

    def test_ports_does_not_import_infrastructure(self):
        """Ports define interfaces; they should not know the SQL implementations."""
        (
            archrule("ports_no_infrastructure")
            .match("authoring.ports*")
            .should_not_import("authoring.infrastructure*")
            .check("authoring")
        )

    def test_ports_does_not_import_application(self):
        (
            archrule("ports_no_application")
            .match("authoring.ports*")
            .should_not_import("authoring.application*")
            .check("authoring")
        )


class TestAuthoringApplicationLayerBoundaries:
    """Tests that the application layer has appropriate dependencies."""

    def test_application_does_not_import_infrastructure(self):
        """Services depend on ports, never on the SQL repositories.

        Wiring of concrete implementations happens in authoring.dependencies.
        """
        (
            archrule("application_no_infrastructure")
            .match("authoring.application*")
            .should_not_import("authoring.infrastructure*")
            .check("authoring")
        )


class TestAuthoringInfrastructureLayerBoundaries:
    def test_infrastructure_does_not_import_application(self):
        (
            archrule("infrastructure_no_application")
            .match("authoring.infrastructure*")
            .should_not_import("authoring.application*")
            .check("authoring")
        )


class TestSharedKernelBoundaries:
    """Tests that Shared Kernel boundaries are properly maintained."""

    def test_shared_kernel_does_not_import_bounded_contexts(self):
        """Shared kernel must not import from bounded contexts."""
        (
            archrule("shared_kernel_no_bounded_contexts")
            .match("shared_kernel*")
            .should_not_import("authoring*")
            .check("shared_kernel")
        )

    def test_shared_kernel_does_not_import_infrastructure(self):
        (
            archrule("shared_kernel_no_infrastructure")
            .match("shared_kernel*")
            .should_not_import("infrastructure*")
            .check("shared_kernel")
        )

    def test_infrastructure_does_not_import_authoring(self):
        """Shared infrastructure (settings, database) is context-agnostic."""
        (
            archrule("infrastructure_no_authoring")
            .match("infrastructure*")
            .should_not_import("authoring*")
            .check("infrastructure")
        )
