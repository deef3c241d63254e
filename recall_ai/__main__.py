# recall_ai/__main__.py
from recall_ai.cli.cli import main

main()
