"""Run the salon API with Uvicorn.

Usage:
    python -m salon

Host and port come from ``HOST`` and ``PORT`` (defaults ``0.0.0.0`` and
``8000``).
"""
import os

import uvicorn


def main() -> None:
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    uvicorn.run("salon.app:create_app", factory=True, host=host, port=port, log_level="info")


if __name__ == "__main__":
    main()
