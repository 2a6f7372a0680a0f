from ghbackup.cli import cli

cli()
