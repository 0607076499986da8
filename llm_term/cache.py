import json
import logging
import os
from typing import Dict, Optional

logger = logging.getLogger(__name__)


class PromptCache:
    """
    Maps prompts to the commands previously generated for them.

    Prompts are used verbatim as keys, so "build it" and "Build it" are
    different entries. Every insert or removal rewrites the whole file.
    """

    def __init__(self, path: str, entries: Optional[Dict[str, str]] = None):
        self.path = path
        self._entries: Dict[str, str] = dict(entries or {})

    @classmethod
    def load(cls, path: str) -> "PromptCache":
        """Loads the cache file, starting empty if it is missing or unreadable."""
        entries: Dict[str, str] = {}
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
            if isinstance(data, dict):
                for prompt, command in data.items():
                    if isinstance(command, str):
                        entries[prompt] = command
                    else:
                        logger.warning(f"Ignoring cache entry {prompt!r}: command is not a string")
            else:
                logger.warning(f"Ignoring cache file {path}: expected a JSON object")
        except FileNotFoundError:
            logger.info(f"No cache file at {path}, starting empty")
        except (IOError, json.JSONDecodeError) as e:
            logger.warning(f"Could not read cache file {path}, starting empty: {e}")
        return cls(path, entries)

    def get(self, prompt: str) -> Optional[str]:
        return self._entries.get(prompt)

    def __contains__(self, prompt: str) -> bool:
        return prompt in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def insert(self, prompt: str, command: str) -> None:
        self._entries[prompt] = command
        logger.info(f"Cached command for prompt: {prompt!r}")
        self.save()

    def remove(self, prompt: str) -> bool:
        """Removes one entry. Returns False if the prompt was not cached."""
        if prompt not in self._entries:
            return False
        del self._entries[prompt]
        logger.info(f"Invalidated cached command for prompt: {prompt!r}")
        self.save()
        return True

    def to_dict(self) -> Dict[str, str]:
        return dict(self._entries)

    def save(self) -> None:
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(self._entries, f, indent=2, ensure_ascii=False)
