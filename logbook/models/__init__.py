# logbook/models/__init__.py
from logbook.models.users import User
from logbook.models.entry import Entry
from logbook.models.memo import Memo
from logbook.models.future_letter import FutureLetter, LetterPeriod
from logbook.models.weekly_review import WeeklyReview
from logbook.models.entry_export import EntryExport
