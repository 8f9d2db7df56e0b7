"""
Command Line Interface for z/OS data set search
"""
import asyncio
import os
import sys
import click
from zos_search.core.client import ZosmfClient
from zos_search.core.config import Config
from zos_search.core.errors import ZosFilesError
from zos_search.search.engine import DataSetSearch
from zos_search.search.models import ProgressTask, SearchOptions, TaskStage
from zos_search.utils.logger import setup_logging


def load_config(config_file):
    """Read the configuration file if given, otherwise the environment"""
    if config_file:
        return Config.load_from_file(config_file)
    return Config.from_env()


@click.group()
@click.option('--config', '-c', type=click.Path(exists=True, dir_okay=False), help='Configuration file path')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.option('--log-file', help='Also write log messages to this file')
@click.pass_context
def cli(ctx, config, verbose, log_file):
    """z/OS data set search CLI"""
    setup_logging('DEBUG' if verbose else 'WARNING', log_file)

    ctx.ensure_object(dict)
    ctx.obj['config_file'] = config


@cli.command('search-data-sets')
@click.argument('pattern')
@click.argument('search_string')
@click.option('--case-sensitive', is_flag=True, help='Match the search string case sensitively')
@click.option('--mainframe-search', is_flag=True,
              help='Ask z/OSMF to check for the string before downloading each data set')
@click.option('--max-concurrent-requests', type=click.IntRange(min=0),
              help='Maximum number of requests in flight (0 for no limit)')
@click.option('--timeout', type=click.IntRange(min=1), help='Stop starting new requests after this many seconds')
@click.option('--host', help='z/OSMF host name')
@click.option('--port', type=int, help='z/OSMF port')
@click.option('--user', help='z/OSMF user name')
@click.option('--password', help='z/OSMF password')
@click.option('--protocol', type=click.Choice(['http', 'https']), help='Protocol used to reach z/OSMF')
@click.option('--no-reject-unauthorized', 'allow_unauthorized', is_flag=True,
              help='Accept self-signed certificates')
@click.option('--encoding', help='Code page used to convert the data sets to text')
@click.pass_context
def search_data_sets(ctx, pattern, search_string, case_sensitive, mainframe_search, max_concurrent_requests,
                     timeout, host, port, user, password, protocol, allow_unauthorized, encoding):
    """Search all data sets and members matching PATTERN for SEARCH_STRING"""
    config = load_config(ctx.obj.get('config_file'))

    overrides = {
        'host': host,
        'port': port,
        'user': user,
        'password': password,
        'protocol': protocol,
        'reject_unauthorized': False if allow_unauthorized else None,
    }
    zosmf_config = config.zosmf.model_copy(update={k: v for k, v in overrides.items() if v is not None})

    progress = ProgressTask()
    options = SearchOptions(
        pattern=pattern,
        search_string=search_string,
        case_sensitive=case_sensitive or config.search.case_sensitive,
        mainframe_search=mainframe_search or config.search.mainframe_search,
        max_concurrent_requests=(
            config.search.max_concurrent_requests if max_concurrent_requests is None else max_concurrent_requests
        ),
        timeout=config.search.timeout if timeout is None else timeout,
        progress_task=progress,
        get_options={'encoding': encoding} if encoding else {}
    )

    async def perform_search():
        async with ZosmfClient(zosmf_config) as client:
            return await DataSetSearch(client).search(options)

    try:
        response = asyncio.run(perform_search())
    except ZosFilesError as e:
        click.echo(f"Search error: {e}", err=True)
        if e.cause_errors:
            click.echo(f"  Cause: {e.cause_errors}", err=True)
        sys.exit(1)

    click.echo(response.command_response)

    if response.error_message:
        click.echo(response.error_message, err=True)

    if progress.stage_name == TaskStage.FAILED:
        click.echo(progress.status_message, err=True)


@cli.command()
@click.option('--output', '-o', default='zos_search_config.json', help='Output configuration file')
@click.pass_context
def init_config(ctx, output):
    """Initialize a configuration file with default settings"""
    config = Config()
    config.save_to_file(output)
    click.echo(f"Configuration file created: {output}")
    click.echo("Edit the file to set the z/OSMF host and user, then use:")
    click.echo(f"  zos-search --config {os.path.abspath(output)} search-data-sets 'HLQ.**' 'text'")


def main():
    """Main entry point"""
    cli()


if __name__ == '__main__':
    main()
