"""Database seeder for local development and manual testing."""
import argparse
import asyncio
import random
import time

from bulletin.database import Base, async_session, engine
from bulletin.models import FLAG_THRESHOLD
from bulletin.repositories.board_repository import BoardRepository
from bulletin.repositories.comment_repository import CommentRepository
from bulletin.repositories.post_repository import PostRepository
from bulletin.repositories.user_repository import UserRepository
from bulletin.security import PasswordHasher
from bulletin.services.board_service import BoardService
from bulletin.services.comment_service import CommentService
from bulletin.services.post_service import PostService
from bulletin.services.user_service import UserService

BOARDS = ["notice", "free", "qna", "tech", "market"]
TOPICS = ["python", "fastapi", "postgresql", "docker", "testing", "performance",
          "security", "async", "sqlalchemy", "pydantic"]


async def seed(small: bool = False):
    num_users = 5 if small else 30
    num_posts = 50 if small else 2000
    max_comments_per_post = 2 if small else 5

    print(f"Seeding: {len(BOARDS)} boards, {num_users} users, {num_posts} posts")
    start = time.perf_counter()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as session:
        boards_repo = BoardRepository(session)
        users_repo = UserRepository(session)
        posts_repo = PostRepository(session)
        board_service = BoardService(boards_repo)
        user_service = UserService(users_repo, posts_repo, PasswordHasher())
        post_service = PostService(posts_repo, boards_repo, users_repo)
        comment_service = CommentService(CommentRepository(session), posts_repo, users_repo)

        boards = [await board_service.create_board(name) for name in BOARDS]
        print(f"  Created {len(boards)} boards")

        # Every seeded account uses the password "password".
        users = [
            await user_service.sign_up(f"user_{i:04d}", "password", f"Member {i}")
            for i in range(num_users)
        ]
        print(f"  Created {len(users)} users")

        total_comments = 0
        flagged = 0
        for i in range(num_posts):
            topic = random.choice(TOPICS)
            post = await post_service.create(
                board_id=random.choice(boards).id,
                user_id=random.choice(users).id,
                title=f"Post {i}: notes on {topic}",
                content=f"Some thoughts about {topic}. " * 10,
                image_url=f"https://img.example.com/{i}.png" if random.random() < 0.2 else None,
            )
            for _ in range(random.randint(0, 5)):
                await post_service.add_like(post.id)
            # Roughly one post in twenty crosses the flag threshold.
            if random.random() < 0.05:
                for _ in range(FLAG_THRESHOLD):
                    await post_service.add_hate(post.id)
                flagged += 1

            for _ in range(random.randint(0, max_comments_per_post)):
                await comment_service.create(
                    post.id,
                    random.choice(users).id,
                    f"Comment on post {i} about {topic}.",
                )
                total_comments += 1

            if (i + 1) % 500 == 0:
                await session.flush()
                print(f"  {i + 1} posts created")

        await session.commit()

    elapsed = time.perf_counter() - start
    print(f"\nSeeding complete in {elapsed:.1f}s")
    print(f"  Boards: {len(BOARDS)}")
    print(f"  Users: {num_users}")
    print(f"  Posts: {num_posts} ({flagged} flagged)")
    print(f"  Comments: {total_comments}")


def main():
    parser = argparse.ArgumentParser(description="Seed the bulletin board database")
    parser.add_argument("--small", action="store_true", help="Use small dataset (50 posts)")
    args = parser.parse_args()
    asyncio.run(seed(small=args.small))


if __name__ == "__main__":
    main()
