'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
from functools import wraps

from vtree.core.errors import ReentrancyError

def not_reentrant(method):
    """Decorator raising ReentrancyError if the tree is already flattening."""
    @wraps(method)
    def wrapper(self, *args, **kwargs):
        if self.is_recomputing():
            raise ReentrancyError(
                f"{method.__name__}() called while the tree is being flattened"
            )
        return method(self, *args, **kwargs)
    return wrapper
