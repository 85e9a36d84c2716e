"""Main CLI entry point for relnotes."""

import logging
import sys

import click

from .. import __version__
from ..config import get_config
from ..exceptions import ReleaseNotesError
from ..git import GitClient
from ..github import GitHubClient
from ..releasenote import build_release_report, render_markdown, render_text


USAGE = "Invoke `relnotes -prev {sha} -curr {sha} {repository}`"


class ReleaseNotesCommand(click.Command):
    """Click command taking exactly ``-prev X -curr Y REPOSITORY``.

    Named options such as ``--debug`` may appear anywhere. Usage errors
    exit with status 1.
    """

    def parse_args(self, ctx, args):
        try:
            if not self._has_eager_option(ctx, args):
                self._check_release_tokens(ctx, self._release_tokens(ctx, args))
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            e.exit_code = 1
            raise

    def _extra_options(self, ctx):
        # Option name -> whether it consumes the next token
        options = {}
        for param in self.get_params(ctx):
            if not isinstance(param, click.Option) or param.name in ('previous', 'current'):
                continue
            for opt in param.opts + param.secondary_opts:
                options[opt] = not (param.is_flag or param.count)
        return options

    def _has_eager_option(self, ctx, args):
        eager = set()
        for param in self.get_params(ctx):
            if isinstance(param, click.Option) and param.is_eager:
                eager.update(param.opts)
        return any(arg in eager for arg in args)

    def _release_tokens(self, ctx, args):
        """Return ``args`` without the named options and their values."""
        options = self._extra_options(ctx)
        tokens = []
        skip_value = False
        for arg in args:
            if skip_value:
                skip_value = False
                continue
            if arg in options:
                skip_value = options[arg]
                continue
            if arg.startswith('--') and arg.split('=', 1)[0] in options:
                continue
            tokens.append(arg)
        return tokens

    def _check_release_tokens(self, ctx, tokens):
        if len(tokens) != 5:
            raise click.UsageError(f"Expected 5 arguments but got {len(tokens)}. {USAGE}", ctx=ctx)
        if tokens[0] != '-prev' or tokens[2] != '-curr':
            raise click.UsageError(f"Invalid arguments. {USAGE}", ctx=ctx)


@click.command(cls=ReleaseNotesCommand)
@click.option('-prev', 'previous', required=True, help='Revision of the previous release (excluded)')
@click.option('-curr', 'current', required=True, help='Revision of the current release (included)')
@click.argument('repository')
@click.option('--debug', is_flag=True, help='Enable debug logging')
@click.option('--config-file', '-c', help='Path to JSON configuration file')
@click.option('--markdown', '-m', is_flag=True, help='Print markdown release notes instead of the summary')
@click.option('--output', '-o', help='Write release notes to file instead of stdout')
@click.option('--workers', type=click.IntRange(min=1), help='Number of concurrent pull request fetches')
@click.option('--timeout', type=click.FloatRange(min=0, min_open=True), help='Seconds before a git or gh call is killed')
@click.option('--skip-failed', is_flag=True, help='Skip pull requests that cannot be fetched')
@click.version_option(version=__version__, prog_name="relnotes")
def cli(previous, current, repository, debug, config_file, markdown, output, workers, timeout, skip_failed):
    """Generate release notes for pull requests merged between two revisions.

    REPOSITORY is the local checkout to inspect. An empty string means the
    current directory.
    """

    # Setup logging, stdout is reserved for the report
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    logger = logging.getLogger('relnotes')

    try:
        config = get_config(config_file)
        workers = workers or config.workers
        timeout = timeout or config.command_timeout
        skip_failed = skip_failed or config.skip_failed_prs

        working_directory = config.working_directory(repository)
        logger.info(f"Generating release notes for {previous}..{current} in {working_directory}")

        git_client = GitClient(
            working_directory,
            git_executable=config.git_executable,
            bot_names=config.bot_names,
            timeout=timeout,
        )
        github_client = GitHubClient(
            working_directory,
            gh_executable=config.gh_executable,
            timeout=timeout,
        )

        report = build_release_report(
            git_client, github_client, previous, current,
            workers=workers, skip_failed=skip_failed,
        )
    except ReleaseNotesError as e:
        logger.debug("Release notes generation failed", exc_info=True)
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if report.skipped:
        click.echo(f"Warning: skipped PRs {', '.join(f'#{n}' for n in report.skipped)}", err=True)

    if markdown:
        notes = render_markdown(report, title=f"Release {current}")
    else:
        notes = render_text(report)

    if output:
        try:
            with open(output, 'w', encoding='utf-8') as f:
                f.write(notes)
        except OSError as e:
            click.echo(f"Error writing to file {output}: {e}", err=True)
            sys.exit(1)
        click.echo(f"Release notes saved to: {output}", err=True)
    else:
        click.echo(notes, nl=False)


def main():
    """Main entry point for console script."""
    cli()


if __name__ == '__main__':
    main()
