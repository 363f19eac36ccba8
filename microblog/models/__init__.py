# Microblog Models
from microblog.models.account import Account
from microblog.models.post import Post

__all__ = [
    "Account",
    "Post",
]
