"""
Tests for the User and Room entities

These exercise the per-entity state machine directly, below the tracker.
"""

from chat_tracker.entities import NOT_ASSOCIATED, Room, User


# ===== User.join_room =====


def test_join_adds_room_at_front_and_registers_member():
    user = User(name="alice")
    room1, room2 = Room(name="room1"), Room(name="room2")

    user.join_room(room1)
    user.join_room(room2)

    assert user.current_room is room2
    assert user.room_names() == ["room2", "room1"]
    assert room1.members == {"alice": user}
    assert room2.members == {"alice": user}


def test_rejoin_moves_to_front_and_keeps_count():
    user = User(name="alice")
    room1, room2 = Room(name="room1"), Room(name="room2")

    user.join_room(room1)
    user.contribute_to_current_room()
    user.contribute_to_current_room()
    user.join_room(room2)
    user.join_room(room1)

    assert user.room_names() == ["room1", "room2"]
    assert user.contributions_to(room1) == 2
    assert user.contribute_to_current_room() == 3


def test_rejoin_does_not_duplicate_history():
    user = User(name="alice")
    room = Room(name="room")

    user.join_room(room)
    user.join_room(room)

    assert user.room_names() == ["room"]
    assert len(room.members) == 1


def test_recreated_room_with_same_name_is_a_new_room():
    user = User(name="alice")
    old_room = Room(name="room")
    user.join_room(old_room)

    new_room = Room(name="room")
    assert user.leave_room(new_room) == NOT_ASSOCIATED
    assert user.contributions_to(new_room) == NOT_ASSOCIATED


# ===== User.leave_room / leave_current_room =====


def test_leave_room_from_middle_of_history():
    user = User(name="alice")
    rooms = [Room(name=f"room{i}") for i in range(3)]
    for room in rooms:
        user.join_room(room)

    assert user.leave_room(rooms[1]) == 0
    assert user.room_names() == ["room2", "room0"]
    assert user.current_room is rooms[2]


def test_leave_room_not_joined():
    user = User(name="alice")
    assert user.leave_room(Room(name="room")) == NOT_ASSOCIATED


def test_leave_room_keeps_room_total_and_members():
    user = User(name="alice")
    room = Room(name="room")
    user.join_room(room)
    user.contribute_to_current_room()

    assert user.leave_room(room) == 1
    assert room.total_contributions == 1
    assert "alice" in room.members


def test_leave_current_room_exposes_previous():
    user = User(name="alice")
    room1, room2 = Room(name="room1"), Room(name="room2")
    user.join_room(room1)
    user.join_room(room2)
    user.contribute_to_current_room()

    assert user.leave_current_room() == 1
    assert user.current_room is room1


def test_leave_current_room_without_rooms():
    user = User(name="alice")
    assert user.leave_current_room() == NOT_ASSOCIATED


# ===== User.contribute_to_current_room =====


def test_contribute_without_room_returns_zero():
    user = User(name="alice")
    assert user.contribute_to_current_room() == 0


def test_contribute_updates_user_and_room():
    user = User(name="alice")
    room = Room(name="room")
    user.join_room(room)

    assert user.contribute_to_current_room() == 1
    assert user.contribute_to_current_room() == 2
    assert room.total_contributions == 2


# ===== Room =====


def test_room_terminate_detaches_every_member():
    room = Room(name="room")
    other = Room(name="other")
    alice, bob = User(name="alice"), User(name="bob")
    alice.join_room(other)
    alice.join_room(room)
    bob.join_room(room)
    alice.contribute_to_current_room()
    bob.contribute_to_current_room()
    bob.contribute_to_current_room()

    assert room.terminate() == 3
    assert room.members == {}
    assert alice.current_room is other
    assert bob.current_room is None


def test_room_terminate_tolerates_members_who_already_left():
    room = Room(name="room")
    alice = User(name="alice")
    alice.join_room(room)
    alice.contribute_to_current_room()
    alice.leave_room(room)

    assert room.terminate() == 1


def test_room_remove_member_ignores_missing():
    room = Room(name="room")
    room.remove_member(User(name="ghost"))
    assert room.members == {}


def test_to_dict():
    room = Room(name="room")
    alice = User(name="alice")
    alice.join_room(room)
    alice.contribute_to_current_room()

    assert room.to_dict() == {
        "name": "room",
        "members": ["alice"],
        "member_count": 1,
        "total_contributions": 1,
    }
    assert alice.to_dict() == {
        "name": "alice",
        "current_room": "room",
        "rooms": [{"room": "room", "contributions": 1}],
    }


def test_repr_does_not_recurse():
    room = Room(name="room")
    alice = User(name="alice")
    alice.join_room(room)

    assert "alice" in repr(alice)
    assert "room" in repr(room)
