from enum import Enum

class PlatformComponent(str, Enum):
    MOBILE_APPS = "MOBILE_APPS"
    PARTICIPANT_MANAGER = "PARTICIPANT_MANAGER"
    PARTICIPANT_DATASTORE = "PARTICIPANT_DATASTORE"
    PARTICIPANT_USER_DATASTORE = "PARTICIPANT_USER_DATASTORE"
    RESPONSE_DATASTORE = "RESPONSE_DATASTORE"
    STUDY_BUILDER = "STUDY_BUILDER"
    STUDY_DATASTORE = "STUDY_DATASTORE"
    AUTH_SERVER = "AUTH_SERVER"
    PUSH_NOTIFICATION_SERVICE = "PUSH_NOTIFICATION_SERVICE"

    @classmethod
    def from_value(cls, value: str | None) -> "PlatformComponent | None":
        for c in cls:
            if c.value == value:
                return c
        return None

class MobilePlatform(str, Enum):
    ANDROID = "ANDROID"
    IOS = "IOS"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def from_value(cls, value: str | None) -> "MobilePlatform":
        if value:
            for p in cls:
                if p.value == value.upper():
                    return p
        return cls.UNKNOWN

class UserAccessLevel(str, Enum):
    APP_STUDY_ADMIN = "APP_STUDY_ADMIN"
    SUPER_ADMIN = "SUPER_ADMIN"

_PM = PlatformComponent.PARTICIPANT_MANAGER
_PD = PlatformComponent.PARTICIPANT_DATASTORE
_PUD = PlatformComponent.PARTICIPANT_USER_DATASTORE
_RD = PlatformComponent.RESPONSE_DATASTORE
_SB = PlatformComponent.STUDY_BUILDER
_PNS = PlatformComponent.PUSH_NOTIFICATION_SERVICE

class AuditLogEvent(Enum):
    """Fixed catalog of audit event definitions, looked up by name.

    Each member is (source, destination, resource_server, user_access_level,
    event_code, description). ``None`` means "keep what the request already has".
    """

    NEW_LOCATION_ADDED = (_PM, _PD, None, None, "NEW_LOCATION_ADDED",
                          "New location added (location ID - ${location_id}).")
    LOCATION_EDITED = (_PM, _PD, None, None, "LOCATION_EDITED",
                       "Location details edited (location ID - ${location_id}).")
    LOCATION_DECOMMISSIONED = (_PM, _PD, None, None, "LOCATION_DECOMMISSIONED",
                               "Location decommissioned (location ID - ${location_id}).")
    LOCATION_ACTIVATED = (_PM, _PD, None, None, "LOCATION_ACTIVATED",
                          "Location reactivated (location ID - ${location_id}).")

    STUDY_METADATA_RECEIVED = (_SB, _PUD, None, None, "STUDY_METADATA_RECEIVED",
                               "Study metadata received (study ID - ${study_id}, version - ${study_version}).")

    PUSH_NOTIFICATION_SENT = (_PUD, _PNS, None, None, "PUSH_NOTIFICATION_SENT",
                              "Push notification of type ${notification_type} sent for app ${app_id} to ${recipients} device(s).")
    PUSH_NOTIFICATION_FAILED = (_PUD, _PNS, None, None, "PUSH_NOTIFICATION_FAILED",
                                "Push notification of type ${notification_type} could not be sent for app ${app_id}.")

    PARTICIPANT_INVITATION_SENT = (_PM, _PD, None, UserAccessLevel.APP_STUDY_ADMIN, "PARTICIPANT_INVITATION_SENT",
                                   "Invitation sent to participant (registry ID - ${participant_id}) for site ${site_id}.")
    PARTICIPANT_INVITATION_FAILED = (_PM, _PD, None, UserAccessLevel.APP_STUDY_ADMIN, "PARTICIPANT_INVITATION_FAILED",
                                     "Invitation could not be sent to participant (registry ID - ${participant_id}) for site ${site_id}.")

    ACTIVITY_STATE_SAVED = (None, _RD, None, None, "ACTIVITY_STATE_SAVED",
                            "Activity state saved for participant ${participant_id} in study ${study_id}.")

    def __init__(self, source, destination, resource_server, user_access_level, event_code, description):
        self.source: PlatformComponent | None = source
        self.destination: PlatformComponent = destination
        self.resource_server: PlatformComponent | None = resource_server
        self.user_access_level: UserAccessLevel | None = user_access_level
        self.event_code: str = event_code
        self.description: str = description
