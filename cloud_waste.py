#!/usr/bin/env python3
"""Cloud Waste Manager - Main entry point."""
import os
import sys
import argparse
from typing import List, Optional

import boto3
from rich.console import Console

from waste_manager.config import WasteManagerConfig, get_config, DELETE_MODES
from waste_manager.logger import setup_logging, get_logger

logger = get_logger(__name__)
console = Console()


def validate_aws_credentials() -> bool:
    """Check that boto3's credential chain resolves to something."""
    if os.environ.get('AWS_ACCESS_KEY_ID') and os.environ.get('AWS_SECRET_ACCESS_KEY'):
        return True
    try:
        return boto3.Session().get_credentials() is not None
    except Exception as e:
        logger.error(f"Failed to validate AWS credentials: {e}")
        return False


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='List idle AWS resources and manage them from a terminal dashboard',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s serve                         # Run the aggregator API on 0.0.0.0:8080
  %(prog)s serve --region eu-west-1      # Aggregate a different region
  %(prog)s serve --fail-fast             # Fail the whole listing if any source fails
  %(prog)s dashboard                     # Open the dashboard against API_URL
  %(prog)s dashboard --api-url http://host:8080
        """
    )
    parser.add_argument(
        '--config',
        help='Path to configuration file'
    )
    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Logging level (default: from config, INFO)'
    )

    subparsers = parser.add_subparsers(dest='command', required=True)

    serve = subparsers.add_parser('serve', help='Run the aggregator HTTP service')
    serve.add_argument('--host', help='Bind address (default: 0.0.0.0)')
    serve.add_argument('--port', type=int, help='Bind port (default: 8080)')
    serve.add_argument('--region', help='AWS region to inventory (default: AWS_REGION)')
    serve.add_argument(
        '--delete-mode',
        choices=list(DELETE_MODES),
        help="'noop' acknowledges deletes without acting; 'provider' really deletes"
    )
    serve.add_argument(
        '--fail-fast',
        action='store_true',
        help='Return an error instead of partial results when a source fails'
    )

    dashboard = subparsers.add_parser('dashboard', help='Open the terminal dashboard')
    dashboard.add_argument('--api-url', help='Aggregator base URL (default: API_URL)')
    dashboard.add_argument('--export-path', help='Default spreadsheet path (default: aws-resources.xlsx)')

    return parser.parse_args(argv)


def apply_overrides(config: WasteManagerConfig, args: argparse.Namespace) -> WasteManagerConfig:
    """Override config with command line args."""
    if args.log_level:
        config.log_level = args.log_level
    if args.command == 'serve':
        if args.host:
            config.host = args.host
        if args.port:
            config.port = args.port
        if args.region:
            config.region = args.region
        if args.delete_mode:
            config.delete_mode = args.delete_mode
        if args.fail_fast:
            config.partial_results = False
    elif args.command == 'dashboard':
        if args.api_url:
            config.api_url = args.api_url
        if args.export_path:
            config.export_path = args.export_path
    return config


def run_server(config: WasteManagerConfig) -> None:
    import uvicorn
    from waste_manager.api import create_app

    if not validate_aws_credentials():
        console.print("[red]Error: No AWS credentials found. Please set AWS_ACCESS_KEY_ID and "
                      "AWS_SECRET_ACCESS_KEY environment variables or configure AWS credentials.[/red]")
        sys.exit(1)

    console.print("[green]✓[/green] AWS credentials validated")
    console.print(
        f"[cyan]Serving idle resources for {config.region} on {config.host}:{config.port} "
        f"(delete mode: {config.delete_mode}, partial results: {config.partial_results})[/cyan]"
    )
    uvicorn.run(create_app(config), host=config.host, port=config.port, log_config=None)


def run_dashboard(config: WasteManagerConfig) -> None:
    from waste_manager.dashboard import ApiClient, DashboardApp, DashboardState

    with ApiClient(config.api_url, timeout=config.http_timeout) as client:
        app = DashboardApp(DashboardState(client), console=console, export_path=config.export_path)
        app.run()


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point."""
    args = parse_arguments(argv)

    if args.config:
        os.environ['WASTE_MANAGER_CONFIG'] = args.config

    config = apply_overrides(get_config(), args)
    setup_logging(config.log_level, config.log_format)

    try:
        if args.command == 'serve':
            run_server(config)
        else:
            run_dashboard(config)
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        sys.exit(130)
    except Exception as e:
        console.print(f"\n[bold red]Error:[/bold red] {e}")
        logger.exception("Unhandled exception in main")
        sys.exit(1)


if __name__ == "__main__":
    main()
