#!/usr/bin/env python3
"""
lanegraph - lane-based commit graph viewer

This is a convenience wrapper for running from the repo root.
The actual entry point is lanegraph.main:main (for pip install).
"""

from lanegraph.main import main

if __name__ == "__main__":
    main()
