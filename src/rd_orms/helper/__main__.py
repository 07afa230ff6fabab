"""
rd_orms.helper.__main__

Entrypoint for `python -m rd_orms.helper <command> <target>`.
"""

from __future__ import annotations

from rd_orms.helper.cli import main

if __name__ == "__main__":
    main()
