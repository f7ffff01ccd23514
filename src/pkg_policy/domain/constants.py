from enum import Enum

# Field of the Keycloak RealmRepresentation that holds the policy string.
PASSWORD_POLICY_FIELD = "passwordPolicy"


class Phase(Enum):
    FETCH = "fetch"
    SUBMIT = "submit"
