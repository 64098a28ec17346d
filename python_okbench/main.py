"""Main entry point for the okbench server."""

import sys
import yaml
from python_okbench.config.config import Config
from python_okbench.server import BindError, start_server


def main():
    """Serve ``ok`` until killed; exit 1 if the port cannot be bound."""
    try:
        config = Config.load()
        host, port = config.listen_address()
        start_server(port, host=host, config=config)
    except (BindError, ValueError, OSError, yaml.YAMLError) as e:
        print(f"Error starting server: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
