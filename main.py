from __future__ import annotations

from textgraphics.cli import main

if __name__ == "__main__":
    main()
