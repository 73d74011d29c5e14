#!/usr/bin/env python3
"""Command-line interface for the SNMP port viewer (read-only)."""

import asyncio
import sys

import click
from rich.console import Console
from rich.markup import escape

from ..bandwidth.exceptions import MonitorError
from ..bandwidth.monitor import PortMonitor
from ..port_viewer.app import probe as run_probe, run_viewer
from ..snmp_client.client import SnmpClient
from ..snmp_client.exceptions import SnmpError
from ..utils.logger import get_logger
from config.settings import settings, SNMP_VERSIONS

logger = get_logger(__name__)

error_console = Console(stderr=True)


def fail(error) -> None:
    """Print an error to stderr and exit with status 1."""
    error_console.print(f"[bold red]Error:[/bold red] {escape(str(error))}")
    sys.exit(1)


def build_monitor(agent, ifname, interval=None, version=None, community=None,
                  user=None, port=None) -> PortMonitor:
    """Create the SNMP session and monitor from options, falling back to settings."""
    client = SnmpClient(
        host=agent,
        port=port,
        community=community,
        version=version,
        username=user,
    )
    return PortMonitor(
        client,
        ifname,
        interval_seconds=interval if interval is not None else settings.get('monitor.interval', 1),
        history_size=settings.get('monitor.history_size', 120),
        page_size=settings.get('monitor.page_size', 10),
    )


@click.command(context_settings={'help_option_names': ['-h', '--help']})
@click.argument('agent')
@click.argument('ifname')
@click.option('-t', '--interval', type=int, default=None,
              help='Sampling interval in seconds (default: monitor.interval, 1)')
@click.option('-v', '--version', 'version', type=click.Choice(SNMP_VERSIONS, case_sensitive=False),
              default=None, help='SNMP version (default: agent.version, 2c)')
@click.option('-c', '--community', help='SNMP community (required for v1/v2c)')
@click.option('-u', '--user', help='SNMPv3 user name (noAuthNoPriv)')
@click.option('-p', '--port', type=int, default=None, help='SNMP agent port (default: 161)')
@click.option('--config', 'config_file', type=click.Path(dir_okay=False),
              help='YAML configuration file')
@click.option('--probe', is_flag=True, help='Resolve and sample twice without the TUI, then exit')
def cli(agent, ifname, interval, version, community, user, port, config_file, probe):
    """Show Rx/Tx utilization of interface IFNAME on SNMP agent AGENT.

    IFNAME is either a case-insensitive substring of ifName (first match
    wins) or a dotted index such as ".3".
    """
    if config_file:
        settings.reload(config_file)

    try:
        monitor = build_monitor(agent, ifname, interval=interval, version=version,
                                community=community, user=user, port=port)
    except (SnmpError, MonitorError) as e:
        fail(e)

    logger.info(f"Monitoring '{ifname}' on {agent} every {monitor.interval_seconds}s")

    try:
        if probe:
            asyncio.run(run_probe(monitor))
            return

        code = run_viewer(monitor, settings.get('monitor.max_consecutive_errors', 3))
    except (SnmpError, MonitorError) as e:
        logger.error(f"Port viewer failed: {e}")
        fail(e)
    except KeyboardInterrupt:
        sys.exit(0)

    sys.exit(code)


def main():
    """Console script entry point."""
    cli(prog_name='port-viewer')


if __name__ == '__main__':
    main()
