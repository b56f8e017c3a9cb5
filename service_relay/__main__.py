"""Run the demo with ``python -m service_relay``."""

from .main import main

main()
