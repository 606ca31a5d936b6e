#  ___  _   ___
# | _ \/_\ / __|
# |  _/ _ \\__ \
# |_|/_/ \_\___/
#
# PAS Commander
# Copyright 2026 PAS Commander contributors
#

from .base import register_commands, aliases, commands, command_info

__all__ = ['register_commands', 'aliases', 'commands', 'command_info']
