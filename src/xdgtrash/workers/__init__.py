# Filename: __init__.py
# Author: Rich Lewis @RichLewis007
# Description: Worker components package for batch tasks. Exports the worker that moves
#              several paths to the trash in one run.

__all__ = ["trash_worker"]
