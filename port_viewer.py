#!/usr/bin/env python3
"""
SNMP Port Viewer - Real-time Rx/Tx utilization of a single interface.

Usage: python port_viewer.py [OPTIONS] AGENT IFNAME

This is the entry point script. The implementation is in src/utils/cli.py
and src/port_viewer/.
"""

from src.utils.cli import main

if __name__ == "__main__":
    main()
