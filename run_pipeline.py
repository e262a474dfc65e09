"""Convenience shim: `python run_pipeline.py START END [owner/repo ...]`."""

from __future__ import annotations

from src.pipeline.runner import main


if __name__ == "__main__":
    main()
