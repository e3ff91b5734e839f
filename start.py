#!/usr/bin/env python3
"""csv-vcard: CSV contacts to vCard.  Run with:  python3 start.py"""
import os
import sys

script_dir = os.path.dirname(os.path.abspath(__file__))
src_dir    = os.path.join(script_dir, "src")

sys.path.insert(0, src_dir)
os.environ["PYTHONPATH"] = src_dir + os.pathsep + os.environ.get("PYTHONPATH", "")

from csv_vcard.config import load_settings
from csv_vcard.launcher import main

main(load_settings())
