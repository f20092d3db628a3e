# Version of this build. The release pipeline rewrites VERSION to the
# published tag; source checkouts keep the development sentinel, which
# disables every upgrade check.
DEV_VERSION = "dev"

VERSION = DEV_VERSION
