import io
import json
import logging
import os
import tempfile
import unittest
from dataclasses import FrozenInstanceError
from pathlib import Path
from unittest import mock

from openalgo.errors import ConfigError
from openalgo.infra.config import DEFAULT_WS_URL, OpenAlgoConfig, config_from_env, load_config
from openalgo.infra.logging import JsonFormatter, configure_logging


class LoadConfigTest(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.dir = Path(self._tmp.name)

    def write(self, text: str) -> Path:
        path = self.dir / "settings.yaml"
        path.write_text(text, encoding="utf-8")
        return path

    def test_reads_openalgo_section(self) -> None:
        path = self.write(
            "openalgo:\n"
            "  api_key: abc\n"
            "  host: http://10.0.0.5:5000/\n"
            "  ws_url: wss://stream.example.com/ws\n"
            "  event_capacity: 256\n"
        )
        config = load_config(path)
        self.assertEqual("abc", config.api_key)
        self.assertEqual("http://10.0.0.5:5000", config.host)
        self.assertEqual("wss://stream.example.com/ws", config.ws_url)
        self.assertEqual(256, config.event_capacity)
        self.assertEqual(32, config.command_capacity)

    def test_missing_file_is_config_error(self) -> None:
        with self.assertRaises(ConfigError):
            load_config(self.dir / "missing.yaml")

    def test_non_mapping_is_config_error(self) -> None:
        with self.assertRaises(ConfigError):
            load_config(self.write("- just\n- a list\n"))

    def test_bad_capacity_is_config_error(self) -> None:
        with self.assertRaises(ConfigError):
            load_config(self.write("openalgo:\n  api_key: k\n  command_capacity: 0\n"))
        with self.assertRaises(ConfigError):
            load_config(self.write("openalgo:\n  api_key: k\n  event_capacity: lots\n"))

    def test_config_is_read_only(self) -> None:
        config = OpenAlgoConfig(api_key="k")
        with self.assertRaises(FrozenInstanceError):
            config.api_key = "other"  # type: ignore[misc]


class EnvOverrideTest(unittest.TestCase):
    def test_environment_overrides_defaults(self) -> None:
        base = OpenAlgoConfig(api_key="from-file", host="http://file:5000")
        env = {"OPENALGO_API_KEY": "from-env", "OPENALGO_WS_URL": "ws://env:9000"}
        with mock.patch.dict(os.environ, env, clear=False):
            config = config_from_env(base)
        self.assertEqual("from-env", config.api_key)
        self.assertEqual("ws://env:9000", config.ws_url)
        self.assertEqual("http://file:5000", config.host)
        self.assertEqual("from-file", base.api_key)

    def test_environment_only(self) -> None:
        with mock.patch.dict(os.environ, {"OPENALGO_API_KEY": "k"}, clear=True):
            config = config_from_env()
        self.assertEqual("k", config.api_key)
        self.assertEqual(DEFAULT_WS_URL, config.ws_url)


class JsonFormatterTest(unittest.TestCase):
    def test_extras_are_merged_into_payload(self) -> None:
        stream = io.StringIO()
        handler = logging.StreamHandler(stream)
        handler.setFormatter(JsonFormatter())
        logger = logging.getLogger("openalgo.test.formatter")
        logger.propagate = False
        logger.addHandler(handler)
        self.addCleanup(logger.removeHandler, handler)

        logger.warning("Stream error: %s", "boom", extra={"event": "stream_error", "url": "ws://x"})

        payload = json.loads(stream.getvalue())
        self.assertEqual("WARNING", payload["level"])
        self.assertEqual("Stream error: boom", payload["message"])
        self.assertEqual("stream_error", payload["event"])
        self.assertEqual("ws://x", payload["url"])
        self.assertNotIn("args", payload)


class ConfigureLoggingTest(unittest.TestCase):
    def setUp(self) -> None:
        root = logging.getLogger()
        ws_logger = logging.getLogger("websockets")
        saved = (list(root.handlers), root.level, ws_logger.level)

        def restore() -> None:
            root.handlers[:] = saved[0]
            root.setLevel(saved[1])
            ws_logger.setLevel(saved[2])

        self.addCleanup(restore)

    def test_client_debug_keeps_websockets_library_quiet(self) -> None:
        stream = io.StringIO()
        with mock.patch.dict(os.environ, {"LOG_LEVEL": "DEBUG"}, clear=False):
            os.environ.pop("WS_LOG_LEVEL", None)
            configure_logging(stream=stream)

        logging.getLogger("openalgo.data.websocket").debug("Sent subscribe", extra={"event": "subscription"})
        logging.getLogger("websockets.client").debug("> TEXT '{...}' [42 bytes]")

        lines = [json.loads(line) for line in stream.getvalue().splitlines()]
        self.assertEqual(["subscription"], [line.get("event") for line in lines])
        self.assertEqual(logging.WARNING, logging.getLogger("websockets").level)

    def test_websockets_level_can_be_raised_from_environment(self) -> None:
        with mock.patch.dict(os.environ, {"WS_LOG_LEVEL": "debug"}, clear=False):
            configure_logging(stream=io.StringIO())
        self.assertEqual(logging.DEBUG, logging.getLogger("websockets").level)


if __name__ == "__main__":
    unittest.main()
