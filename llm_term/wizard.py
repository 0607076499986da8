from typing import Optional

from rich.console import Console
from rich.prompt import IntPrompt, Prompt

from . import ui
from .config import MAX_TOKENS_LIMIT, Configuration
from .model import Custom, Model, Ollama, OpenAiGpt4o, OpenAiGpt4oMini

MENU = """[cyan]Select model:
 1 for gpt-4o-mini
 2 for gpt-4o
 3 for ollama (llama3.1)
 4 for custom model[/cyan]"""


def _optional(answer: str) -> Optional[str]:
    answer = answer.strip()
    return answer or None


def prompt_model(console: Console = ui.console) -> Model:
    """Asks which backend to use until a valid choice is made."""
    while True:
        console.print(MENU)
        choice = Prompt.ask("", console=console, default="", show_default=False).strip()
        if choice == "1":
            return OpenAiGpt4oMini()
        if choice == "2":
            return OpenAiGpt4o()
        if choice == "3":
            return Ollama("llama3.1")
        if choice == "4":
            return prompt_custom_model(console)
        ui.display_error("Invalid choice. Please try again.", console)


def prompt_custom_model(console: Console = ui.console) -> Custom:
    name = Prompt.ask("[cyan]Enter custom model name[/cyan]", console=console).strip()
    url = Prompt.ask("[cyan]Enter endpoint URL[/cyan]", console=console).strip()
    system_prompt = Prompt.ask(
        "[cyan]Enter custom system prompt (optional, press Enter to use default)[/cyan]",
        console=console, default="", show_default=False,
    )
    api_key = Prompt.ask(
        "[cyan]Enter API key (optional, press Enter to use environment variable)[/cyan]",
        console=console, default="", show_default=False, password=True,
    )
    return Custom(name=name, url=url, prompt_override=_optional(system_prompt), key=_optional(api_key))


def prompt_max_tokens(console: Console = ui.console) -> int:
    while True:
        tokens = IntPrompt.ask(f"[cyan]Enter max tokens (1-{MAX_TOKENS_LIMIT})[/cyan]", console=console)
        if 0 < tokens <= MAX_TOKENS_LIMIT:
            return tokens
        ui.display_error(f"Invalid input. Please enter a number between 1 and {MAX_TOKENS_LIMIT}.", console)


def run_setup_wizard(console: Console = ui.console) -> Configuration:
    """Interactively builds a fresh configuration."""
    model = prompt_model(console)
    max_tokens = prompt_max_tokens(console)
    return Configuration(model=model, max_tokens=max_tokens)
