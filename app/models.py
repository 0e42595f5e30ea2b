# Importing this module registers every table on Base.metadata.
from app.modules.admins.models import AdminUser, AppPermission, StudyPermission  # noqa: F401
from app.modules.studies.models import App, Study  # noqa: F401
from app.modules.locations.models import Location, Site  # noqa: F401
from app.modules.participants.models import AppUser, ParticipantRegistrySite, ParticipantStudy, ParticipantActivity  # noqa: F401
from app.modules.audit.models import AuditEvent  # noqa: F401
