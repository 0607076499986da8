import logging
from typing import Callable, Optional

from . import ui
from .api import resolve
from .cache import PromptCache
from .config import Configuration, Settings, load_or_create_configuration, save_configuration
from .gate import ConfirmationGate, GateOutcome
from .model import Custom
from .shell import Shell
from .wizard import run_setup_wizard

logger = logging.getLogger(__name__)

Resolver = Callable[[str, Configuration, Optional[Shell]], Optional[str]]


def handle_prompt(
    prompt: str,
    configuration: Configuration,
    cache: Optional[PromptCache],
    gate: ConfirmationGate,
    shell: Shell,
    resolver: Resolver = resolve,
) -> Optional[GateOutcome]:
    """
    Turns a prompt into a confirmed (or declined) command.

    A cached command is offered first. If the user declines it and asks for
    invalidation, the entry is dropped and the model is asked again. Pass
    cache=None to bypass the cache entirely.

    Returns:
        The gate's outcome, or None when no command could be generated.

    Raises:
        MissingCredentialError, BackendError: propagated from the resolver.
    """
    if cache is not None:
        cached_command = cache.get(prompt)
        if cached_command is not None:
            logger.info(f"Cache hit for prompt: {prompt!r}")
            outcome = gate.present(cached_command, cached=True)
            if outcome is not GateOutcome.DECLINED_THEN_INVALIDATED:
                return outcome
            cache.remove(prompt)
        else:
            logger.info(f"Cache miss for prompt: {prompt!r}")

    return _resolve_and_present(prompt, configuration, cache, gate, shell, resolver)


def _resolve_and_present(
    prompt: str,
    configuration: Configuration,
    cache: Optional[PromptCache],
    gate: ConfirmationGate,
    shell: Shell,
    resolver: Resolver,
) -> Optional[GateOutcome]:
    command = resolver(prompt, configuration, shell)
    if not command or not command.strip():
        ui.display_notice("No command could be generated.")
        return None

    outcome = gate.present(command)

    if cache is not None:
        cache.insert(prompt, command)
    return outcome


def handle_show_config(settings: Settings, shell: Shell) -> None:
    """Handler for --show-config."""
    configuration = load_or_create_configuration(settings.config_path, run_setup_wizard)
    ui.display_config(configuration.model.display_config(shell), configuration.max_tokens)


def handle_setup(settings: Settings) -> None:
    """Handler for --config. Replaces any existing configuration."""
    configuration = run_setup_wizard()
    save_configuration(settings.config_path, configuration)
    ui.display_success("Configuration saved successfully.")


def handle_custom_model(
    settings: Settings,
    model_name: Optional[str],
    endpoint: Optional[str],
    system_prompt: Optional[str],
    api_key: Optional[str],
) -> bool:
    """Handler for the --custom-* options. Both a model name and an endpoint are required."""
    if not model_name or not endpoint:
        ui.display_error("Error: Both --custom-model and --custom-endpoint are required for custom model configuration.")
        return False

    configuration = load_or_create_configuration(settings.config_path, run_setup_wizard)
    configuration = configuration.with_model(
        Custom(name=model_name, url=endpoint, prompt_override=system_prompt, key=api_key)
    )
    save_configuration(settings.config_path, configuration)
    ui.display_success("Custom model configuration saved successfully.")
    return True
