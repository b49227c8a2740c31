#!/usr/bin/python3
# -*-coding:utf-8 -*-
"""Extract cover.

Usage: extract-cover.py -i comic.cbz [-o OUTPUT_DIR] [-s WIDTH]
"""

import sys

from cbzcover.cli import main

if __name__ == '__main__':
    sys.exit(main())
