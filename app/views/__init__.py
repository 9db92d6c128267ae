from __future__ import annotations
from flask import Blueprint


bp = Blueprint('main', __name__)

# import and register submodules
from . import listing as _listing  # noqa: E402
from . import detail as _detail  # noqa: E402
from . import admin as _admin  # noqa: E402


_listing.register(bp)
_detail.register(bp)
_admin.register(bp)

__all__ = ['bp']
