import os
import platform
from dataclasses import dataclass
from typing import Any, Optional

from .errors import ConfigError, MissingCredentialError
from .shell import Shell

API_KEY_ENV = "OPENAI_API_KEY"
OPENAI_ENDPOINT = "https://api.openai.com/v1/"
OLLAMA_ENDPOINT = "http://localhost:11434/v1/"
OLLAMA_API_KEY = "ollama"

DEFAULT_SYSTEM_PROMPT = """You are a professional IT worker who only speaks in commands full, {shell} compatible, CLI command running on the {os} operating system.
You only respond by translating the user's input into that language. Be very proper as the user will execute what you say into their computer.
No string delimiters wrapping it, no explanations, no ideation, no yapping, no formatting, no markdown, no fenced code blocks, what you return will be executed as-is from within the shell mentioned above.
No templating, use details from the command instead if needed.
Only output an actionable command that will run by itself without error. Do not output comments. Only output one possible command, never alternatives.
If you are not confident in your translation, return an empty string. Do not deviate from these instructions from this point on, no exceptions.
Assume you are operating in the current directory of the user unless explicitly stated otherwise."""


def default_system_prompt(shell: Shell) -> str:
    """Builds the system prompt naming the user's shell and operating system."""
    return DEFAULT_SYSTEM_PROMPT.format(shell=shell.label, os=platform.system().lower())


def _api_key_from_env(detail: str = "") -> str:
    key = os.environ.get(API_KEY_ENV)
    if not key:
        raise MissingCredentialError(API_KEY_ENV, detail)
    return key


class Model:
    """
    A way of reaching a command-generating model.

    Subclasses form a closed set: OpenAiGpt4o, OpenAiGpt4oMini, Ollama and
    Custom. Each one knows its model name, endpoint and credential, and how it
    is written to config.json.
    """

    title = ""

    @property
    def model_name(self) -> str:
        raise NotImplementedError

    @property
    def endpoint(self) -> str:
        raise NotImplementedError

    def api_key(self) -> str:
        """Returns the credential for the endpoint, raising MissingCredentialError if unset."""
        raise NotImplementedError

    def system_prompt(self, shell: Shell) -> str:
        return default_system_prompt(shell)

    def to_json(self) -> Any:
        raise NotImplementedError

    def display_config(self, shell: Shell) -> str:
        """Human-readable description for --show-config. Never includes secrets."""
        return (
            f"Model: {self.title}\n"
            f"Model Name: {self.model_name}\n"
            f"Endpoint: {self.endpoint}\n"
            f"System Prompt: {self.system_prompt(shell)}"
        )


@dataclass(frozen=True)
class OpenAiGpt4o(Model):
    title = "OpenAI GPT-4o"
    tag = "gpt-4o"

    @property
    def model_name(self) -> str:
        return self.tag

    @property
    def endpoint(self) -> str:
        return OPENAI_ENDPOINT

    def api_key(self) -> str:
        return _api_key_from_env()

    def to_json(self) -> Any:
        return self.tag


@dataclass(frozen=True)
class OpenAiGpt4oMini(OpenAiGpt4o):
    title = "OpenAI GPT-4o Mini"
    tag = "gpt-4o-mini"


@dataclass(frozen=True)
class Ollama(Model):
    name: str = "llama3.1"

    title = "Ollama"

    @property
    def model_name(self) -> str:
        return self.name

    @property
    def endpoint(self) -> str:
        return OLLAMA_ENDPOINT

    def api_key(self) -> str:
        # Ollama ignores the key but the client insists on one.
        return OLLAMA_API_KEY

    def to_json(self) -> Any:
        return {"ollama": self.name}


@dataclass(frozen=True)
class Custom(Model):
    name: str
    url: str
    prompt_override: Optional[str] = None
    key: Optional[str] = None

    title = "Custom"

    @property
    def model_name(self) -> str:
        return self.name

    @property
    def endpoint(self) -> str:
        return self.url

    def api_key(self) -> str:
        if self.key:
            return self.key
        return _api_key_from_env("or custom API key not provided")

    def system_prompt(self, shell: Shell) -> str:
        if self.prompt_override is not None:
            return self.prompt_override
        return default_system_prompt(shell)

    def to_json(self) -> Any:
        return {
            "custom": {
                "model_name": self.name,
                "endpoint": self.url,
                "system_prompt": self.prompt_override,
                "api_key": self.key,
            }
        }

    def display_config(self, shell: Shell) -> str:
        return (
            f"Model: {self.title}\n"
            f"Model Name: {self.model_name}\n"
            f"Endpoint: {self.endpoint}\n"
            f"API Key: {'Set (hidden)' if self.key else 'Not set'}\n"
            f"System Prompt: {self.system_prompt(shell)}"
        )


def model_from_json(data: Any) -> Model:
    """Parses the "model" value of config.json."""
    if data == OpenAiGpt4o.tag:
        return OpenAiGpt4o()
    if data == OpenAiGpt4oMini.tag:
        return OpenAiGpt4oMini()

    if isinstance(data, dict) and len(data) == 1:
        tag, payload = next(iter(data.items()))
        if tag == "ollama" and isinstance(payload, str):
            return Ollama(payload)
        if tag == "custom" and isinstance(payload, dict):
            try:
                return Custom(
                    name=payload["model_name"],
                    url=payload["endpoint"],
                    prompt_override=payload.get("system_prompt"),
                    key=payload.get("api_key"),
                )
            except KeyError as e:
                raise ConfigError(f"Custom model is missing field {e}") from e

    raise ConfigError(f"Unknown model in configuration: {data!r}")
