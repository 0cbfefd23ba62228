#!/usr/bin/env python3
"""
Entry point for running the package as a module.
"""
from entra_login.main import run

if __name__ == "__main__":
    run()
