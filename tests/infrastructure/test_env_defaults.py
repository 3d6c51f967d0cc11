from pathlib import Path

from kurl.infrastructure.config.env_defaults import DEFAULT_USER_AGENT, EnvDefaults


def test_defaults_without_environment(tmp_path: Path) -> None:
    defaults = EnvDefaults.from_env(env={}, env_file=tmp_path / ".env")
    assert defaults.connect_timeout is None
    assert defaults.user_agent == DEFAULT_USER_AGENT
    assert defaults.insecure is False


def test_reads_environment(tmp_path: Path) -> None:
    env = {"KURL_CONNECT_TIMEOUT": "2.5", "KURL_USER_AGENT": "probe/1", "KURL_INSECURE": "yes"}
    defaults = EnvDefaults.from_env(env=env, env_file=tmp_path / ".env")
    assert defaults.connect_timeout == 2.5
    assert defaults.user_agent == "probe/1"
    assert defaults.insecure is True


def test_dotenv_file_is_overridden_by_environment(tmp_path: Path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("KURL_CONNECT_TIMEOUT=7\nKURL_USER_AGENT=from-file\n", encoding="utf-8")

    defaults = EnvDefaults.from_env(env={"KURL_USER_AGENT": "from-env"}, env_file=env_file)

    assert defaults.connect_timeout == 7.0
    assert defaults.user_agent == "from-env"


def test_malformed_timeout_is_ignored(tmp_path: Path) -> None:
    defaults = EnvDefaults.from_env(env={"KURL_CONNECT_TIMEOUT": "soon"}, env_file=tmp_path / ".env")
    assert defaults.connect_timeout is None
