#!/usr/bin/env python3
"""btclient - command-line launcher for a BitTorrent transfer engine."""

from __future__ import annotations

from btclient.cli.main import main

if __name__ == "__main__":
    main()
