"""Allow ``python -m streaming_xml_formatter``."""

from .cli.main import run

run()
