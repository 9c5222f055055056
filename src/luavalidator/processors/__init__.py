"""Syntax checking and lexical rule scanning of Lua source."""
