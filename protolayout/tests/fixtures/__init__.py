"""Test fixtures for protolayout tests.

This module provides sample declaration sets used across the layout tests.
"""

from protolayout.declarations import MessageDeclaration


def declarations(*names: str, start: int = 1) -> list[MessageDeclaration]:
    """Create declarations with consecutive protocol ids for the given names."""
    return [
        MessageDeclaration(protocol_id=start + index, declaration_name=name)
        for index, name in enumerate(names)
    ]


# Two messages directly under one namespace
SIBLINGS = ('pkg.Foo', 'pkg.Bar')

# One message below a sub-namespace, one directly under the parent
MIXED_LEVELS = ('pkg.sub.Foo', 'pkg.Bar')

# Messages nested at different depths below a common ancestor
COMMON_ANCESTOR = ('a.b.X', 'a.c.Y', 'a.b.c.Z')

# A realistic game protocol layout
GAME_PROTOCOLS = (
    'com.game.common.Error',
    'com.game.common.Heartbeat',
    'com.game.login.LoginRequest',
    'com.game.login.LoginResponse',
    'com.game.login.auth.Token',
    'com.game.chat.ChatMessage',
    'com.game.chat.room.JoinRoom',
    'com.game.chat.room.LeaveRoom',
)

DECLARATIONS_YAML = """\
declarations:
  - protocol_id: 100
    declaration_name: com.game.login.LoginRequest
  - protocol_id: 101
    declaration_name: com.game.login.LoginResponse
  - protocol_id: 200
    declaration_name: com.game.chat.ChatMessage
  - protocol_id: 201
    declaration_name: com.game.chat.room.JoinRoom
"""
