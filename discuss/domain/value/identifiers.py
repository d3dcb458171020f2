"""Strongly typed identifiers for comment engine entities.

Comments, likes and users are identified by database-assigned integers.
NewType keeps a CommentId from being passed where a UserId is expected.
"""

from typing import NewType

CommentId = NewType("CommentId", int)
LikeId = NewType("LikeId", int)
UserId = NewType("UserId", int)
TargetId = NewType("TargetId", int)
