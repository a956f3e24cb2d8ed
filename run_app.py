#!/usr/bin/env python
"""Run the BriefOS web service."""

import uvicorn
from dotenv import load_dotenv

from briefos.config.settings import get_settings

load_dotenv()


def main():
    import argparse

    settings = get_settings()

    parser = argparse.ArgumentParser(description="BriefOS Web Service")
    parser.add_argument("--host", default=settings.host, help="Host")
    parser.add_argument("--port", type=int, default=settings.port, help="Port")
    parser.add_argument("--reload", action="store_true", help="Auto-reload")

    args = parser.parse_args()

    print(f"""
╔═══════════════════════════════════════════════════════════════╗
║                                                               ║
║   📰  BriefOS - Daily CCaaS Intelligence                      ║
║                                                               ║
║   API:      http://{args.host}:{args.port}/api/briefs/latest
║   Status:   http://{args.host}:{args.port}/api/status
║                                                               ║
╚═══════════════════════════════════════════════════════════════╝
    """)

    uvicorn.run(
        "briefos.app.main:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level="debug" if settings.debug else "info",
    )


if __name__ == "__main__":
    main()
