import json
import os
import tempfile
import unittest
from unittest.mock import MagicMock, patch

from llm_term.config import (
    Configuration,
    Settings,
    load_configuration,
    load_or_create_configuration,
    save_configuration,
)
from llm_term.errors import ConfigError
from llm_term.model import Custom, Ollama, OpenAiGpt4oMini


class TestSettings(unittest.TestCase):
    """Test cases for the Settings class."""

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.settings_file = os.path.join(self.tmp.name, "settings.toml")

    def tearDown(self):
        self.tmp.cleanup()

    def test_default_values(self):
        """Without environment or file, files live beside the executable."""
        with patch.dict(os.environ, {}, clear=True), \
                patch("llm_term.config._executable_dir", return_value="/opt/llm-term/bin"):
            settings = Settings(settings_file=self.settings_file)

            self.assertEqual(settings.data_dir, "/opt/llm-term/bin")
            self.assertEqual(settings.log_dir, os.path.join("/opt/llm-term/bin", "logs"))
            self.assertEqual(settings.config_path, os.path.join("/opt/llm-term/bin", "config.json"))
            self.assertEqual(settings.cache_path, os.path.join("/opt/llm-term/bin", "cache.json"))
            self.assertFalse(settings.verbose)

    def test_environment_overrides_file(self):
        with open(self.settings_file, "w") as f:
            f.write('[paths]\nLLM_TERM_DATA_DIR = "/from/file"\n')

        env_vars = {"LLM_TERM_DATA_DIR": "/from/env", "LLM_TERM_VERBOSE": "true"}
        with patch.dict(os.environ, env_vars, clear=True):
            settings = Settings(settings_file=self.settings_file)

            self.assertEqual(settings.data_dir, "/from/env")
            self.assertTrue(settings.verbose)

    def test_file_values(self):
        with open(self.settings_file, "w") as f:
            f.write('LLM_TERM_DATA_DIR = "/from/file"\n\n[logging]\nLLM_TERM_LOG_DIR = "/var/log/llm-term"\nLLM_TERM_VERBOSE = true\n')

        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(settings_file=self.settings_file)

            self.assertEqual(settings.data_dir, "/from/file")
            self.assertEqual(settings.log_dir, "/var/log/llm-term")
            self.assertTrue(settings.verbose)

    def test_broken_settings_file_falls_back_to_defaults(self):
        with open(self.settings_file, "w") as f:
            f.write("this is = = not toml")

        with patch.dict(os.environ, {}, clear=True), \
                patch("llm_term.config._executable_dir", return_value="/somewhere"):
            settings = Settings(settings_file=self.settings_file)

            self.assertEqual(settings.data_dir, "/somewhere")


class TestConfiguration(unittest.TestCase):
    """Test cases for Configuration persistence."""

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.tmp.name, "config.json")

    def tearDown(self):
        self.tmp.cleanup()

    def test_max_tokens_range(self):
        Configuration(OpenAiGpt4oMini(), 1)
        Configuration(OpenAiGpt4oMini(), 4096)
        for bad in (0, -5, 4097, "256", True):
            with self.assertRaises(ConfigError):
                Configuration(OpenAiGpt4oMini(), bad)

    def test_save_writes_tagged_model(self):
        save_configuration(self.path, Configuration(Ollama("llama3.1"), 256))

        with open(self.path) as f:
            data = json.load(f)
        self.assertEqual(data, {"model": {"ollama": "llama3.1"}, "max_tokens": 256})

    def test_save_and_load(self):
        configuration = Configuration(Custom("m", "http://h/v1/", "prompt", None), 512)
        save_configuration(self.path, configuration)

        self.assertEqual(load_configuration(self.path), configuration)

    def test_load_missing_file(self):
        self.assertIsNone(load_configuration(self.path))

    def test_load_unparseable_file(self):
        with open(self.path, "w") as f:
            f.write("{not json")
        self.assertIsNone(load_configuration(self.path))

    def test_load_invalid_contents(self):
        with open(self.path, "w") as f:
            json.dump({"model": "gpt-4o"}, f)
        with self.assertRaises(ConfigError):
            load_configuration(self.path)

    def test_load_or_create_runs_wizard_once(self):
        create = MagicMock(return_value=Configuration(OpenAiGpt4oMini(), 256))

        first = load_or_create_configuration(self.path, create)
        second = load_or_create_configuration(self.path, create)

        create.assert_called_once()
        self.assertEqual(first, second)
        self.assertTrue(os.path.exists(self.path))

    def test_with_model_keeps_max_tokens(self):
        configuration = Configuration(OpenAiGpt4oMini(), 300).with_model(Ollama("qwen"))
        self.assertEqual(configuration, Configuration(Ollama("qwen"), 300))


if __name__ == "__main__":
    unittest.main()
