# Services package.
#
# Each module exposes a service class that encapsulates the business logic
# for a single domain aggregate:
#
#   todo_service : owner-scoped CRUD for Todo
#
# Services receive their repositories through the constructor; the wiring
# for HTTP requests lives in ``app.dependencies``.
