# Services package.
#
# Each module exposes one service class holding the business rules for a
# single aggregate:
#
#   board_service   : board CRUD, unique names
#   user_service    : signup / login / password change
#   post_service    : post CRUD, search, view / like / hate counters
#   comment_service : comments scoped to a post, author-only mutation
#
# Services receive their repositories (and the password hasher) through
# the constructor; ``bulletin.dependencies`` builds them per request on
# top of the ``get_db`` session, so the router layer keeps control of the
# transaction boundary.
