from voice_processor.cli import cli

cli()
