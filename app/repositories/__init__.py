# Repositories package.
#
# Each module defines a persistence protocol for one aggregate together with
# its SQLAlchemy implementation:
#
#   todo_repository : TodoRepository protocol + SqlAlchemyTodoRepository
#
# Implementations receive the request's AsyncSession in their constructor and
# only flush; the ``get_db`` dependency owns the transaction boundary.
