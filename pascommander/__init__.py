# -*- coding: utf-8 -*-
#  ___  _   ___
# | _ \/_\ / __|
# |  _/ _ \\__ \
# |_|/_/ \_\___/
#
# PAS Commander
# Copyright 2026 PAS Commander contributors
#

__version__ = '1.2.0'
