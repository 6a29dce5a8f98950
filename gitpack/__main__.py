from gitpack.main import cli

cli()
