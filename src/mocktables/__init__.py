from .collection import Collection  # noqa
from .db import Database  # noqa
