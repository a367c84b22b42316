"""Like-set toggling shared by projects and blogs."""


def toggle_like(likes: list[int] | None, user_id: int) -> tuple[list[int], bool]:
    """Flip `user_id`'s membership in a like set.

    Returns the new list (a fresh object, so the ORM sees the change) and
    whether the user now likes the entity.
    """
    current = list(likes or [])
    if user_id in current:
        return [uid for uid in current if uid != user_id], False
    return [*current, user_id], True
