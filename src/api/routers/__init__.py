# This file marks the routers package for API route modules.
# Each module groups the endpoints of one directory area: listings, companies, disposals,
# site content, payments and one-off actions.
