from pathlib import Path

from flask import Flask, Response

from show_advance.config import load_config, resolve_path

# ----------------------------
# Paths
# ----------------------------
ROOT = Path(__file__).resolve().parent
CONFIG_PATH = ROOT / "config.json"

MIME_TYPES = {
    ".html": "text/html; charset=utf-8",
    ".js": "text/javascript; charset=utf-8",
    ".css": "text/css; charset=utf-8",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".svg": "image/svg+xml",
}
DEFAULT_MIME_TYPE = "application/octet-stream"


class ForbiddenPathError(Exception):
    """Requested path resolves outside the static root."""


# ----------------------------
# Helper functions
# ----------------------------
def content_type_for(path) -> str:
    return MIME_TYPES.get(Path(path).suffix.lower(), DEFAULT_MIME_TYPE)


def resolve_static_path(root: Path, request_path: str) -> Path:
    """
    Map a request path onto a file under root.

    "/" and directories map to index.html. Raises ForbiddenPathError when
    the path escapes root, FileNotFoundError when nothing is there.
    """
    root = Path(root).resolve()
    rel = (request_path or "").replace("\\", "/").lstrip("/")
    candidate = (root / rel).resolve() if rel else root

    if candidate != root and root not in candidate.parents:
        raise ForbiddenPathError(request_path)

    if candidate.is_dir():
        candidate = candidate / "index.html"
    if not candidate.is_file():
        raise FileNotFoundError(request_path)
    return candidate


def read_static_file(root: Path, request_path: str):
    """Return (status, body, content_type) for a request path."""
    try:
        path = resolve_static_path(root, request_path)
        return 200, path.read_bytes(), content_type_for(path)
    except ForbiddenPathError:
        print(f"[STATIC] Forbidden path: {request_path}", flush=True)
        return 403, b"Forbidden", "text/plain; charset=utf-8"
    except FileNotFoundError:
        return 404, b"Not Found", "text/plain; charset=utf-8"
    except OSError as e:
        print(f"[STATIC] Error reading {request_path}: {e}", flush=True)
        return 500, b"Server Error", "text/plain; charset=utf-8"


# ----------------------------
# Flask
# ----------------------------
def create_app(static_root=None) -> Flask:
    cfg = load_config(CONFIG_PATH)
    root = Path(static_root) if static_root is not None else resolve_path(cfg["static_root"], ROOT)

    # static_folder=None: every path goes through serve_path below
    app = Flask(__name__, static_folder=None)
    app.config["STATIC_ROOT"] = root

    @app.get("/")
    def index():
        return serve_path("/")

    @app.get("/<path:filename>")
    def serve_path(filename: str):
        status, body, content_type = read_static_file(app.config["STATIC_ROOT"], filename)
        return Response(body, status=status, content_type=content_type)

    return app


app = create_app()


if __name__ == "__main__":
    port = load_config(CONFIG_PATH)["port"]
    print(f"Show advance app available at http://localhost:{port}")
    app.run(debug=False, host="127.0.0.1", port=port, use_reloader=False)
