"""
Proclang parser

Recursive descent recognizer for a small procedural language: a `procedure`
block declaring typed variables and running a sequence of assignments. The
result is a parse tree that mirrors the grammar derivation.
"""

__version__ = "0.1.0"


from ._error import *
from ._node import *
from ._scan import *
from ._result import *
from ._grammar import *
