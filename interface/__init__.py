"""
Interface package: hosts that drive the chess bot.

Modules:
    uci — Universal Chess Interface (UCI) handler around SearchEngine.
          Reads commands from stdin, writes responses to stdout.
          Can be run as a standalone script: python interface/uci.py
"""
