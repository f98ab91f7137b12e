"""
API Routers - HTTP endpoint handlers

Each router handles a specific domain of functionality:
- users: account management (admin only)
- catalog: labels, genres, people, artists, band members, records, record genres
- commerce: addresses, payments, shopping sessions, albums, cart items, orders
- health: Health checks and system info

Resource routers are built by crud.build_crud_router from the resource registry.
"""
