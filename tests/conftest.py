"""Shared fixtures for validator tests."""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest


@pytest.fixture
def lua_file(tmp_path):
    """Factory creating Lua files under a temporary directory."""
    def _create_file(content: str, filename: str = "test.lua") -> Path:
        file_path = tmp_path / filename
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(textwrap.dedent(content), encoding="utf-8")
        return file_path
    return _create_file


@pytest.fixture
def sample_lua_code():
    """Sample Lua sources keyed by what they exercise."""
    return {
        "clean": textwrap.dedent("""\
            local Players = game:GetService("Players")
            local function greet(name)
                print("Hello, " .. name)
            end
            Players.PlayerAdded:Connect(function(player)
                greet(player.Name)
            end)
        """),
        "deprecated": textwrap.dedent("""\
            wait(1)
            spawn(function() end)
            delay(2, function() end)
        """),
        "client": textwrap.dedent("""\
            local player = game.Players.LocalPlayer
            local mouse = game.Players.LocalPlayer.Mouse
        """),
        "invalid": "local x = (",
    }
