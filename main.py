"""Entry point for the context-aware ring launcher."""

import os
import sys
import threading
from pathlib import Path

from dotenv import load_dotenv

from profile_module.models import Profile
from utils.log_utils import tprint
from utils.settings_store import refresh_settings
from utils.system_utils import is_macos
from utils.threading_utils import run_async


def _is_enabled(name: str, default: bool = True) -> bool:
    """Read a boolean-like environment variable (1/0/true/false)."""
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _load_env_files() -> None:
    """Load .env files from common locations (repo, module dir, home)."""
    candidates: list[Path] = []
    cwd = Path.cwd()
    candidates.extend([cwd / "env/.env", cwd / ".env"])

    module_root = Path(__file__).resolve().parent
    candidates.extend([module_root / "env/.env", module_root / ".env"])

    home = Path.home()
    candidates.extend([home / ".ring.env", home / ".env.ring"])

    for path in candidates:
        if path.exists():
            load_dotenv(dotenv_path=str(path), override=False)


def _announce(profile: Profile) -> None:
    tprint(f"[MAIN] Active profile: {profile.name} ({len(profile.slots)} slots)")


def _serve_api(port: int) -> None:
    import uvicorn

    from api.server import app

    uvicorn.run(app, host="127.0.0.1", port=port, log_level="warning")


def bootstrap() -> None:
    """Wire up the controller, focus watcher and optional API."""
    _load_env_files()
    refresh_settings()

    from api.server import controller

    controller.subscribe(_announce)
    controller.handle_focus_change(None)

    watch_focus = _is_enabled("ENABLE_FOCUS_WATCHER", is_macos())
    controller.start(watch_focus=watch_focus)
    if not watch_focus:
        tprint("[MAIN] Focus watcher disabled; send focus changes through the API")

    if _is_enabled("ENABLE_API", True):
        port = int(os.getenv("API_PORT", "8000"))
        run_async(lambda: _serve_api(port), name="RingAPI")
        tprint(f"[MAIN] API listening on http://127.0.0.1:{port}")
    elif not watch_focus:
        tprint("[MAIN][WARN] Nothing to do: focus watcher and API are both disabled")
        controller.stop()
        sys.exit(1)

    stop = threading.Event()
    try:
        while not stop.wait(1.0):
            pass
    except KeyboardInterrupt:
        tprint("[MAIN] Received interrupt. Shutting down...")
    finally:
        controller.stop()


if __name__ == "__main__":
    bootstrap()
