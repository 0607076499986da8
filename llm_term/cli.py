import argparse
import logging
from typing import List, Optional

from . import __version__, ui
from .cache import PromptCache
from .config import Settings, load_or_create_configuration
from .errors import LlmTermError
from .executor import CommandExecutor
from .gate import ConfirmationGate
from .handlers import handle_custom_model, handle_prompt, handle_setup, handle_show_config
from .logger import setup_logging
from .shell import Shell
from .wizard import run_setup_wizard

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="llm-term",
        description="Generate terminal commands using OpenAI, local Ollama or any OpenAI-compatible model.",
    )
    parser.add_argument("prompt", nargs="?", help="The prompt describing the desired command")
    parser.add_argument("-c", "--config", action="store_true", help="Run configuration setup")
    parser.add_argument("--show-config", action="store_true", help="Display current configuration")
    parser.add_argument("--custom-model", metavar="MODEL_NAME", help="Set custom model name")
    parser.add_argument("--custom-endpoint", metavar="ENDPOINT_URL", help="Set custom endpoint URL")
    parser.add_argument("--custom-system-prompt", metavar="SYSTEM_PROMPT", help="Set custom system prompt")
    parser.add_argument("--custom-api-key", metavar="API_KEY", help="Set custom API key")
    parser.add_argument("--disable-cache", action="store_true", help="Disable cache and always query the LLM")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def run_cli(argv: Optional[List[str]] = None) -> int:
    """Parses arguments, dispatches to a handler and returns the exit code."""
    args = build_parser().parse_args(argv)
    settings = Settings()
    setup_logging(settings)

    try:
        return _dispatch(args, settings)
    except LlmTermError as e:
        logger.error(str(e))
        ui.display_error(f"Error: {e}")
        return 1


def _dispatch(args: argparse.Namespace, settings: Settings) -> int:
    custom = (args.custom_model, args.custom_endpoint, args.custom_system_prompt, args.custom_api_key)
    if any(value is not None for value in custom):
        return 0 if handle_custom_model(settings, *custom) else 1

    if args.config:
        handle_setup(settings)
        return 0

    if args.show_config:
        handle_show_config(settings, Shell.detect())
        return 0

    if not args.prompt:
        ui.display_usage()
        return 0

    configuration = load_or_create_configuration(settings.config_path, run_setup_wizard)
    cache = None if args.disable_cache else PromptCache.load(settings.cache_path)
    shell = Shell.detect()
    gate = ConfirmationGate(CommandExecutor(shell))
    handle_prompt(args.prompt, configuration, cache, gate, shell)
    return 0
