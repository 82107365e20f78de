"""El retrievor - retrieve, parse, and insert data from football database."""

APP_NAME = "El retrievor"
APP_DESCRIPTION = "Retrieve, parse, and insert data from football database."

__version__ = "0.1"
