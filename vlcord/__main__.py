"""Permet l'execution via ``python -m vlcord``."""

from vlcord.main import main

main()
