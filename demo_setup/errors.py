"""Exceptions for the demo environment setup."""


class SetupError(RuntimeError):
    """Raised when a setup run cannot continue."""


class NotLoggedInError(SetupError):
    """The oc session is not authenticated."""


class ContextError(SetupError):
    """The required kubeconfig context is missing or cannot be selected."""


class MissingScriptsError(SetupError):
    """One or more step scripts do not exist."""

    def __init__(self, missing: list[str]) -> None:
        self.missing = missing
        super().__init__(f"The following required scripts are missing: {' '.join(missing)}")


class StepFailedError(SetupError):
    """A step finished with an unexpected result; the run is aborted."""

    def __init__(self, step_name: str, reason: str) -> None:
        self.step_name = step_name
        self.reason = reason
        super().__init__(f"Script failed: {step_name} ({reason})")


class DemoAppsError(SetupError):
    """The demo applications repository could not be prepared."""


class ConfigError(SetupError):
    """The pipeline configuration file is invalid."""
