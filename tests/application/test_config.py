from pathlib import Path

from lexiladder.application.config import AppConfig, resolve_config
from lexiladder.application.factory import get_review_repository, get_review_service
from lexiladder.infrastructure.repositories.json_snapshot import JsonSnapshotRepository


def test_defaults(mock_home):
    config = resolve_config()
    assert config.snapshot_path == mock_home / ".config" / "lexiladder" / "reviews.json"
    assert config.strict_levels is False
    assert config.seed is None
    assert config.verbose == 1


def test_env_overrides_defaults(monkeypatch, tmp_path):
    monkeypatch.setenv("LEXILADDER_STRICT_LEVELS", "true")
    monkeypatch.setenv("LEXILADDER_SEED", "7")
    monkeypatch.setenv("LEXILADDER_SNAPSHOT_PATH", str(tmp_path / "env.json"))

    config = resolve_config()

    assert config.strict_levels is True
    assert config.seed == 7
    assert config.snapshot_path == (tmp_path / "env.json").resolve()


def test_toml_file_is_loaded(mock_home):
    cfg_dir = mock_home / ".config" / "lexiladder"
    cfg_dir.mkdir(parents=True)
    (cfg_dir / "config.toml").write_text("seed = 99\nverbose = 0\n", encoding="utf-8")

    config = resolve_config()

    assert config.seed == 99
    assert config.verbose == 0


def test_precedence_cli_over_env_over_toml(mock_home, monkeypatch):
    (mock_home / ".lexiladder.toml").write_text("seed = 1\nverbose = 0\n", encoding="utf-8")
    monkeypatch.setenv("LEXILADDER_SEED", "2")

    config = resolve_config({"seed": 3, "verbose": None})

    assert config.seed == 3
    assert config.verbose == 0


def test_snapshot_path_is_expanded(mock_home):
    config = AppConfig(snapshot_path="~/words.json")
    assert config.snapshot_path == (mock_home / "words.json").resolve()


def test_factory_wires_snapshot_and_policy(tmp_path):
    config = resolve_config({"snapshot_path": tmp_path / "r.json", "strict_levels": True})

    repo = get_review_repository(config)
    assert isinstance(repo, JsonSnapshotRepository)
    assert repo.path == Path(tmp_path / "r.json").resolve()

    service = get_review_service(config)
    assert service._strict is True


def test_seeded_services_produce_same_queue(tmp_path):
    config = resolve_config({"snapshot_path": tmp_path / "r.json", "seed": 5})
    words = [f"w{i}" for i in range(12)]

    first = get_review_service(config).due(words)
    second = get_review_service(config).due(words)

    assert first == second
