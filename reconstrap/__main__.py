#!/usr/bin/env python3
"""
reconstrap module entry point
Allows running: python3 -m reconstrap
"""

if __name__ == '__main__':
    from reconstrap.cli import main
    main()
