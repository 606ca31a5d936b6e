#  ___  _   ___
# | _ \/_\ / __|
# |  _/ _ \\__ \
# |_|/_/ \_\___/
#
# PAS Commander
# Copyright 2026 PAS Commander contributors
#

class Error(Exception):
    """Base class for exceptions in this module."""
    def __init__(self, message):
        self.message = message

    def __str__(self):
        return self.message


class UnsupportedVersionError(Error):
    """Exception raised when the PVWA server is older than an operation requires
    """

    def __init__(self, required_version, actual_version):
        super().__init__(f'Minimum PVWA version {required_version} required, '
                         f'server version is {actual_version or "unknown"}')
        self.required_version = required_version
        self.actual_version = actual_version


class CommandError(Error):
    def __init__(self, command, message):
        super().__init__(message)
        self.command = command

    def __str__(self):
        if self.command:
            return f'{self.command}: {self.message}'
        else:
            return super().__str__()
