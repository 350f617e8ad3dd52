"""Entry point for the local-file-search MCP server."""

from local_search.server import create_server


def main() -> None:
    """Run the local-file-search MCP server."""
    server = create_server()
    server.run(transport="stdio")


if __name__ == "__main__":
    main()
