from figma2theme.cli import cli

if __name__ == "__main__":
    cli()
