class LlmTermError(Exception):
    """Base class for errors reported to the user."""


class ConfigError(LlmTermError):
    """The configuration is invalid or incomplete."""


class MissingCredentialError(ConfigError):
    """A required API key could not be found."""

    def __init__(self, variable: str, detail: str = ""):
        self.variable = variable
        message = f"{variable} environment variable not set"
        if detail:
            message = f"{message} {detail}"
        super().__init__(message)


class BackendError(LlmTermError):
    """The model backend could not be reached or returned garbage."""
