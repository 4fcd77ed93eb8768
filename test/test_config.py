#!/usr/bin/env python3
import logging
import os
import subprocess
import sys
import unittest

import helpers  # noqa: F401

from gotify_bridge.constants import load_config, normalize_endpoint, parse_duration
from gotify_bridge.errors import ConfigError

ROOT = os.path.join(os.path.dirname(os.path.abspath(__file__)), "..")


class TestLoadConfig(unittest.TestCase):
    def test_defaults(self):
        config = load_config({"GOTIFY_TOKEN": "abc"})
        self.assertEqual(config.gotify_endpoint, "http://127.0.0.1:80/message")
        self.assertEqual(config.gotify_token, "abc")
        self.assertEqual(config.port, 8080)
        self.assertEqual(config.webhook_path, "/gotify_webhook")
        self.assertEqual(config.timeout, 5.0)
        self.assertEqual(config.title_annotation, "description")
        self.assertEqual(config.message_annotation, "summary")
        self.assertEqual(config.priority_annotation, "priority")
        self.assertEqual(config.default_priority, 5)
        self.assertFalse(config.extended_details)
        self.assertFalse(config.metrics_auth_enabled)
        self.assertEqual(config.metrics_path, "/metrics")

    def test_overrides(self):
        config = load_config({
            "GOTIFY_TOKEN": "abc",
            "GOTIFY_ENDPOINT": "https://push.example.com/message",
            "PORT": "9000",
            "TIMEOUT": "500ms",
            "SUMMARY_ANNOTATION": "message",
            "DEFAULT_PRIORITY": "2",
            "EXTENDED_DETAILS": "true",
            "AUTH_USERNAME": "prom",
            "AUTH_PASSWORD": "pw",
        })
        self.assertEqual(config.gotify_endpoint, "https://push.example.com/message")
        self.assertEqual(config.port, 9000)
        self.assertEqual(config.timeout, 0.5)
        self.assertEqual(config.message_annotation, "message")
        self.assertEqual(config.default_priority, 2)
        self.assertTrue(config.extended_details)
        self.assertTrue(config.metrics_auth_enabled)

    def test_missing_token(self):
        with self.assertRaises(ConfigError):
            load_config({})

    def test_endpoint_suffix_is_appended(self):
        logger = logging.getLogger("test_config")
        with self.assertLogs(logger, level="WARNING"):
            config = load_config({"GOTIFY_TOKEN": "abc", "GOTIFY_ENDPOINT": "http://gotify:8080"}, logger=logger)
        self.assertEqual(config.gotify_endpoint, "http://gotify:8080/message")

    def test_invalid_endpoint(self):
        with self.assertRaises(ConfigError):
            load_config({"GOTIFY_TOKEN": "abc", "GOTIFY_ENDPOINT": "gotify:8080"})

    def test_invalid_numbers(self):
        with self.assertRaises(ConfigError):
            load_config({"GOTIFY_TOKEN": "abc", "DEFAULT_PRIORITY": "high"})
        with self.assertRaises(ConfigError):
            load_config({"GOTIFY_TOKEN": "abc", "TIMEOUT": "soon"})


    def test_debug_mode_values(self):
        for raw, expected in (("true", True), ("1", True), ("yes", True), ("on", True), ("false", False), ("", False)):
            with self.subTest(raw=raw):
                self.assertEqual(load_config({"GOTIFY_TOKEN": "abc", "DEBUG_MODE": raw}).debug, expected)

    def test_invalid_port(self):
        with self.assertRaises(ConfigError) as ctx:
            load_config({"GOTIFY_TOKEN": "abc", "PORT": "abc"})
        self.assertIn("PORT must be an integer", str(ctx.exception))


class TestStartup(unittest.TestCase):
    def _run_main(self, **env):
        environ = {k: v for k, v in os.environ.items() if k not in ("PORT", "DEBUG_MODE", "GOTIFY_TOKEN")}
        environ.update(env)
        return subprocess.run(
            [sys.executable, "-c", "import main"],
            cwd=ROOT, env=environ, capture_output=True, text=True, timeout=60,
        )

    def test_invalid_port_exits_with_message(self):
        result = self._run_main(GOTIFY_TOKEN="abc", PORT="abc")
        self.assertEqual(result.returncode, 1)
        self.assertIn("ERROR: PORT must be an integer", result.stderr)
        self.assertNotIn("Traceback", result.stderr)

    def test_missing_token_exits_with_message(self):
        result = self._run_main()
        self.assertEqual(result.returncode, 1)
        self.assertIn("GOTIFY_TOKEN", result.stderr)


class TestHelpers(unittest.TestCase):
    def test_normalize_endpoint(self):
        self.assertEqual(normalize_endpoint("http://g/message"), "http://g/message")
        self.assertEqual(normalize_endpoint("http://g/"), "http://g/message")
        self.assertEqual(normalize_endpoint("http://g"), "http://g/message")

    def test_parse_duration(self):
        self.assertEqual(parse_duration("5"), 5.0)
        self.assertEqual(parse_duration("5s"), 5.0)
        self.assertEqual(parse_duration("1.5s"), 1.5)
        self.assertEqual(parse_duration("1m"), 60.0)
        self.assertEqual(parse_duration(None), 5.0)
        with self.assertRaises(ConfigError):
            parse_duration("0s")


if __name__ == '__main__':
    unittest.main()
