"""Unit tests for the boundcache command line."""

import json

import pytest
from click.testing import CliRunner

from boundcache.cli import main


@pytest.fixture
def invoke(tmp_path):
    runner = CliRunner()
    path = tmp_path / "cache.json"

    def _invoke(*args, max_size=100):
        return runner.invoke(main, ["--file", str(path), "--max-size", str(max_size), *args])

    return _invoke


class TestCli:
    def test_set_and_get_json_value(self, invoke):
        assert invoke("set", "user", '{"name": "alice"}').exit_code == 0

        result = invoke("get", "user")

        assert result.exit_code == 0
        assert json.loads(result.output) == {"name": "alice"}

    def test_plain_string_value(self, invoke):
        invoke("set", "greeting", "hello world")
        assert json.loads(invoke("get", "greeting").output) == "hello world"

    def test_get_missing_exits_nonzero(self, invoke):
        result = invoke("get", "nope")
        assert result.exit_code == 1

    def test_has_keys_size(self, invoke):
        invoke("set", "a", "1")
        invoke("set", "b", "2")

        assert json.loads(invoke("has", "a").output) is True
        assert json.loads(invoke("has", "zzz").output) is False
        assert json.loads(invoke("keys").output) == ["a", "b"]
        assert json.loads(invoke("size").output) == 2

    def test_delete_and_clear(self, invoke, tmp_path):
        invoke("set", "a", "1")
        invoke("set", "b", "2")

        assert invoke("delete", "a").exit_code == 0
        assert invoke("delete", "a").exit_code == 0
        assert json.loads(invoke("keys").output) == ["b"]

        assert invoke("clear").exit_code == 0
        assert not (tmp_path / "cache.json").exists()
        assert json.loads(invoke("size").output) == 0

    def test_expired_value_is_not_found(self, invoke):
        invoke("set", "temp", "x", "--ttl=-1")
        assert invoke("get", "temp").exit_code == 1

    def test_capacity_is_enforced(self, invoke):
        for key in ("a", "b", "c"):
            invoke("set", key, "1", max_size=2)

        assert json.loads(invoke("keys", max_size=2).output) == ["b", "c"]

    def test_rejects_zero_capacity(self, invoke):
        assert invoke("size", max_size=0).exit_code != 0

    def test_help_describes_every_command(self):
        result = CliRunner().invoke(main, ["--help"])

        assert result.exit_code == 0
        for fragment in ("Print whether KEY", "Print stored keys", "Print the number of stored"):
            assert fragment in result.output
