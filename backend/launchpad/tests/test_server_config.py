import runpy
from pathlib import Path

GUNICORN_CONF = Path(__file__).resolve().parents[2] / "gunicorn.conf.py"


def test_gunicorn_runs_a_single_worker(monkeypatch):
    monkeypatch.setenv("LAUNCHPAD_WORKERS", "8")
    conf = runpy.run_path(str(GUNICORN_CONF))

    assert conf["workers"] == 1
    assert conf["worker_class"] == "uvicorn.workers.UvicornWorker"
    assert conf["timeout"] > 120
