"""PausePaws — dev launcher for the API server or the MCP server."""

import argparse
import os
from pathlib import Path

import uvicorn
from dotenv import load_dotenv

ROOT = Path(__file__).parent
load_dotenv(ROOT / ".env")


def main():
    parser = argparse.ArgumentParser(description="PausePaws dev launcher")
    parser.add_argument("--data-dir", type=Path, default=None,
                        help="Data storage directory (default: ./data)")
    parser.add_argument("--host", default=os.getenv("HOST", "0.0.0.0"))
    parser.add_argument("--port", type=int, default=int(os.getenv("BACKEND_PORT", "13013")))
    parser.add_argument("--no-reload", action="store_true",
                        help="Disable auto-reload on source changes")
    parser.add_argument("--reset", action="store_true",
                        help="Forget saved wellbeing stats and mood log before starting")
    parser.add_argument("--mcp", action="store_true",
                        help="Serve the companion as MCP tools over stdio instead of HTTP")
    args = parser.parse_args()

    data_dir = (args.data_dir or ROOT / "data").resolve()
    # The app module reads DATA_DIR at import, also in uvicorn's reload worker
    os.environ["DATA_DIR"] = str(data_dir)

    if args.reset:
        from backend import storage
        storage.init_storage(data_dir)
        storage.clear_wellbeing()
        storage.clear_moods()

    if args.mcp:
        from backend import companion, storage
        from backend.mcp_server import mcp
        storage.init_storage(data_dir)
        companion.init_session()
        mcp.run()
        return

    print(f"Starting backend on http://localhost:{args.port} ...")
    uvicorn.run("backend.app:app", host=args.host, port=args.port, reload=not args.no_reload)


if __name__ == "__main__":
    main()
