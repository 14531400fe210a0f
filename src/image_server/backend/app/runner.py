import subprocess
import sys
from pathlib import Path

from image_server.backend.app.core.config import settings


def run() -> subprocess.Popen:
    pkg_dir = Path(__file__).resolve().parent
    main_path = pkg_dir / "main.py"
    if not main_path.exists():
        raise FileNotFoundError(f"No main.py found in {main_path}")

    api_cmd = [
        sys.executable,
        "-m", "uvicorn",
        "image_server.backend.app.main:app",
        "--host", settings.HOST,
        "--port", str(settings.PORT),
    ]

    print(f"Image server running at http://localhost:{settings.PORT}")
    api_proc = subprocess.Popen(api_cmd)
    return api_proc
