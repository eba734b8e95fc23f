"""Allow ``python -m preqstation_mcp``."""
from preqstation_mcp.main import main

if __name__ == "__main__":
    main()
