"""Entry point for the org graph API server.

Usage:
    python run_server.py --port 8000 --directory-url https://intranet.example.com/directory.json
"""

import argparse
import os


def main() -> None:
    parser = argparse.ArgumentParser(description="Org Graph API server")
    parser.add_argument("--host", type=str, default="127.0.0.1", help="Interface to bind to")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind to")
    parser.add_argument("--directory-url", type=str, help="Employee directory JSON endpoint")
    parser.add_argument("--photo-url-template", type=str, help="Photo URL template ({email}, {email_hash})")
    parser.add_argument("--log-level", type=str, default="info", help="uvicorn log level")
    args = parser.parse_args()

    if args.directory_url:
        os.environ["ORG_GRAPH_DIRECTORY_URL"] = args.directory_url
    if args.photo_url_template:
        os.environ["ORG_GRAPH_PHOTO_URL_TEMPLATE"] = args.photo_url_template

    import uvicorn
    from org_graph.main import app

    uvicorn.run(
        app,
        host=args.host,
        port=args.port,
        log_level=args.log_level,
    )


if __name__ == "__main__":
    main()
