import pytest

from toolinit.config import ConfigError, Settings, load_settings


def test_defaults() -> None:
    assert load_settings(env={}) == Settings()
    assert Settings().timeout == 30.0


def test_environment_overrides_defaults() -> None:
    env = {
        "TOOLINIT_GITHUB_URL": "https://git.example.com",
        "TOOLINIT_GIT": "/usr/local/bin/git",
        "TOOLINIT_TIMEOUT": "12.5",
        "TOOLINIT_MANIFEST": "deps.yaml",
        "UNRELATED": "x",
    }
    assert load_settings(env=env) == Settings(
        github_url="https://git.example.com",
        git_executable="/usr/local/bin/git",
        timeout=12.5,
        manifest_path="deps.yaml",
    )


def test_blank_environment_values_are_ignored() -> None:
    assert load_settings(env={"TOOLINIT_TIMEOUT": "  "}) == Settings()


def test_explicit_overrides_win_and_none_is_ignored() -> None:
    settings = load_settings(env={"TOOLINIT_TIMEOUT": "5"}, timeout="8", github_url=None)
    assert settings.timeout == 8.0
    assert settings.github_url == "https://github.com"


@pytest.mark.parametrize("raw", ["soon", "0", "-1"])
def test_invalid_timeout(raw: str) -> None:
    with pytest.raises(ConfigError, match="Invalid timeout"):
        load_settings(env={"TOOLINIT_TIMEOUT": raw})


def test_unknown_override() -> None:
    with pytest.raises(ConfigError, match="colour"):
        load_settings(env={}, colour="red")
