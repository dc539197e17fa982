#!/usr/bin/env python3
"""
Backend startup wrapper: serves taste.main:app with uvicorn.

Host and port come from TASTE_HOST / TASTE_PORT (default 0.0.0.0:8000).
"""
import os
import sys

import uvicorn

# Add workspace to path
workspace_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, workspace_root)


def main() -> None:
    host = os.getenv("TASTE_HOST", "0.0.0.0")
    port = int(os.getenv("TASTE_PORT", "8000"))
    print(f"[Backend] Starting taste backend on http://{host}:{port}")
    try:
        uvicorn.run(
            "taste.main:app",
            host=host,
            port=port,
            reload=False,
            log_level="info",
            access_log=True,
        )
    except KeyboardInterrupt:
        print("\n[Backend] Shutting down...")
        sys.exit(0)


if __name__ == "__main__":
    main()
