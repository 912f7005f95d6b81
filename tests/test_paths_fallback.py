from pathlib import Path

import pytest

from tictactotal.config import Config, load_config, log_dir, repo_root


def _clear_env(monkeypatch):
    for var in ("T3_REPO_ROOT", "T3_LOG_DIR", "T3_GAME", "T3_BOARD_SIZE", "T3_TRACKING"):
        monkeypatch.delenv(var, raising=False)


def test_repo_root_prefers_cwd_when_no_git_and_no_env(tmp_path: Path, monkeypatch):
    _clear_env(monkeypatch)
    monkeypatch.chdir(tmp_path)
    import tictactotal.config as C

    monkeypatch.setattr(C, "_git_root", lambda start: None)

    assert repo_root() == tmp_path
    assert log_dir() == tmp_path / "runs"


def test_env_overrides(tmp_path: Path, monkeypatch):
    _clear_env(monkeypatch)
    monkeypatch.setenv("T3_REPO_ROOT", str(tmp_path))
    monkeypatch.setenv("T3_GAME", "total")
    monkeypatch.setenv("T3_BOARD_SIZE", "4")
    monkeypatch.setenv("T3_TRACKING", "mlflow")
    cfg = load_config()
    assert cfg == Config(game="total", board_size=4, tracking="mlflow", log_dir=tmp_path / "runs")

    monkeypatch.setenv("T3_LOG_DIR", str(tmp_path / "elsewhere"))
    assert load_config().log_dir == tmp_path / "elsewhere"


def test_defaults(monkeypatch):
    _clear_env(monkeypatch)
    cfg = load_config()
    assert (cfg.game, cfg.board_size, cfg.tracking) == ("tictactoe", 3, "none")


@pytest.mark.parametrize(
    "var,value",
    [("T3_GAME", "chess"), ("T3_BOARD_SIZE", "three"), ("T3_BOARD_SIZE", "0"), ("T3_TRACKING", "wandb")],
)
def test_bad_env_values_raise(monkeypatch, var, value):
    _clear_env(monkeypatch)
    monkeypatch.setenv(var, value)
    with pytest.raises(ValueError):
        load_config()


def test_git_root_found_from_nested_directory(tmp_path: Path):
    import tictactotal.config as C

    (tmp_path / ".git").mkdir()
    nested = tmp_path / "src" / "tictactotal"
    nested.mkdir(parents=True)
    assert C._git_root(nested) == tmp_path
    assert C._git_root(tmp_path / "src") == tmp_path
