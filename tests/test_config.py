import importlib

from mhflauncher import config


def test_config_reads_expected_env(monkeypatch) -> None:
    monkeypatch.setenv("MHFLAUNCHER_LOCAL_URL", "http://127.0.0.1:9999")
    monkeypatch.setenv("MHFLAUNCHER_CUSTOM_HOST", "http://mhf.example.net")
    monkeypatch.setenv("MHFLAUNCHER_MHF_FOLDER", "/games/mhf")
    monkeypatch.setenv("MHFLAUNCHER_RUNTIME_CMD", 'wine "/games/mhf iel.exe" --stdin')

    try:
        cfg = importlib.reload(config)
        assert cfg.LOCAL_URL == "http://127.0.0.1:9999"
        assert cfg.CUSTOM_HOST == "http://mhf.example.net"
        assert cfg.MHF_FOLDER == "/games/mhf"
        assert cfg.RUNTIME_CMD == ["wine", "/games/mhf iel.exe", "--stdin"]
    finally:
        monkeypatch.undo()
        importlib.reload(config)


def test_config_applies_defaults(monkeypatch) -> None:
    for key in ("MHFLAUNCHER_LOCAL_URL", "MHFLAUNCHER_CUSTOM_HOST", "MHFLAUNCHER_MHF_FOLDER", "MHFLAUNCHER_RUNTIME_CMD"):
        monkeypatch.delenv(key, raising=False)

    try:
        cfg = importlib.reload(config)
        assert cfg.LOCAL_URL == "http://127.0.0.1:8080"
        assert cfg.CUSTOM_HOST == ""
        assert cfg.MHF_FOLDER == "F:/Games/Monster Hunter Frontier Online"
        assert cfg.RUNTIME_CMD == []
    finally:
        monkeypatch.undo()
        importlib.reload(config)
