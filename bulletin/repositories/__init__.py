# Repositories package.
#
# One class per aggregate, each constructed with the request's AsyncSession:
#
#   board_repository   : boards, unique-name lookups
#   user_repository    : users, username / nickname lookups
#   post_repository    : posts, paginated listings, substring search, counters
#   comment_repository : comments scoped to a post or an author, counters
#
# Repositories flush but never commit; the ``get_db`` dependency owns the
# transaction.  Counter changes are single UPDATE statements so concurrent
# requests cannot lose increments.
