# Glossa API Routers
