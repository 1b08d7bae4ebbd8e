# This file marks the services package for API business logic modules.
# It exists so routers can depend on cohesive service classes instead of reading storage rows directly.
