"""CLI argument parsing and uvicorn entry point."""

import logging
import os


def main():
    import argparse
    import uvicorn

    parser = argparse.ArgumentParser(description="WebAI API Server")
    parser.add_argument("--host", default=os.getenv("WEBAI_HOST", "0.0.0.0"))
    parser.add_argument("--port", type=int, default=int(os.getenv("WEBAI_PORT", "8000")))
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(levelname)s: %(name)s - %(message)s",
    )

    from .app import api
    uvicorn.run(api, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
