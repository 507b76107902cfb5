# lumen/log.py
import os
import sys


def _verbose() -> bool:
    return os.getenv("VERBOSE", "1") != "0"


def log(*a):
    if _verbose():
        print("[info]", *a, flush=True)


def ok(*a):
    print("[ok]", *a, flush=True)


def warn(*a):
    print("[warn]", *a, file=sys.stderr, flush=True)


def error(*a):
    print("[error]", *a, file=sys.stderr, flush=True)
