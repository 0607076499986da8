import logging
from typing import Optional

from openai import OpenAI, OpenAIError

from .config import Configuration
from .errors import BackendError
from .shell import Shell

# Configure logging
logger = logging.getLogger(__name__)

TEMPERATURE = 0.5


class CompletionClient:
    """A client for an OpenAI-compatible chat completions endpoint."""

    def __init__(self, api_key: str, base_url: str, model: str):
        """
        Initializes the CompletionClient.

        Args:
            api_key: The credential sent to the endpoint.
            base_url: The endpoint, e.g. https://api.openai.com/v1/.
            model: The model to use for generation.
        """
        self.model_name = model
        self.base_url = base_url
        # Failed requests are reported, never retried.
        self.client = OpenAI(api_key=api_key, base_url=base_url, max_retries=0)
        logger.info(f"Initialized completion client with model {model} at {base_url}")

    def generate_command(self, system_prompt: str, user_prompt: str, max_tokens: int) -> Optional[str]:
        """
        Sends one system + user message pair and returns the first choice's text.

        Returns:
            The message content, or None if the model returned no choices.

        Raises:
            BackendError: The request failed or the response could not be decoded.
        """
        try:
            response = self.client.chat.completions.create(
                model=self.model_name,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                max_tokens=max_tokens,
                temperature=TEMPERATURE,
            )
        except OpenAIError as e:
            logger.error(f"Error calling {self.base_url}: {e}")
            raise BackendError(f"Request to {self.base_url} failed: {e}") from e

        # A non-JSON body comes back from the SDK as a plain str.
        try:
            choices = response.choices
        except AttributeError as e:
            logger.error(f"Unexpected response from {self.base_url}: {response!r:.200}")
            raise BackendError(f"{self.base_url} returned an unexpected response") from e

        if not choices:
            logger.warning("Model returned no choices")
            return None
        message = choices[0].message
        if message is None:
            return None
        return message.content


def resolve(prompt: str, configuration: Configuration, shell: Optional[Shell] = None) -> Optional[str]:
    """
    Asks the configured backend for a command that carries out `prompt`.

    The returned command is passed through untouched.

    Raises:
        MissingCredentialError: No API key is available for the backend.
        BackendError: The backend call failed.
    """
    model = configuration.model
    api_key = model.api_key()
    if shell is None:
        shell = Shell.detect()

    client = CompletionClient(api_key=api_key, base_url=model.endpoint, model=model.model_name)
    return client.generate_command(model.system_prompt(shell), prompt, configuration.max_tokens)
