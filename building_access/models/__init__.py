# Building Access Reports — Database Models
# Import all models here for SQLAlchemy discovery

from building_access.models.person import Person                  # noqa
from building_access.models.room import Room                      # noqa
from building_access.models.access import Access                  # noqa
from building_access.models.access_history import AccessHistory   # noqa
from building_access.models.report_snapshot import ReportSnapshot # noqa
