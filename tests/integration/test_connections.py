"""Tests for connection storage and the connection service."""

import pytest

from modbus_simulator.cache import EndpointKey, register_cache
from modbus_simulator.db import connections as connections_db
from modbus_simulator.helpers import connections as connection_service
from modbus_simulator.helpers import slaves as slave_service
from modbus_simulator.schemas.db_models import ProtocolType
from modbus_simulator.schemas.db_models.models import (
    ConnectionCreate,
    ConnectionUpdate,
    RegisterResponse,
    SlaveCreate,
)
from modbus_simulator.utils.exceptions import ConflictError, NotFoundError, ValidationError


def cached_key(port: int, slave_address: int) -> str:
    return f"modbus_simulator:port_slave_registers:{port}:{slave_address}"


async def seed_cache(port: int, slave_address: int) -> None:
    await register_cache.set(
        EndpointKey(port, slave_address),
        [RegisterResponse(id="r", slave_id="s", start_address=1, hex_payload="FF")],
    )


class TestCreateConnection:

    async def test_first_auto_port_is_502(self):
        connection = await connection_service.create_connection(ConnectionCreate(name="Main"))
        assert connection.port == 502
        assert connection.protocol_type is ProtocolType.RTU_OVER_TCP
        assert len(connection.id) == 32

    async def test_second_auto_port_follows_first(self):
        first = await connection_service.create_connection(ConnectionCreate(name="First"))
        second = await connection_service.create_connection(ConnectionCreate(name="Second"))
        assert second.port == first.port + 1 == 503

    async def test_auto_port_follows_highest_explicit_port(self):
        await connection_service.create_connection(ConnectionCreate(name="Explicit", port=8000))
        auto = await connection_service.create_connection(ConnectionCreate(name="Auto"))
        assert auto.port == 8001

    async def test_low_explicit_ports_do_not_lower_the_base(self):
        await connection_service.create_connection(ConnectionCreate(name="Low", port=100))
        auto = await connection_service.create_connection(ConnectionCreate(name="Auto"))
        assert auto.port == 502

    async def test_name_is_trimmed(self):
        connection = await connection_service.create_connection(ConnectionCreate(name="  Main  "))
        assert connection.name == "Main"

    async def test_duplicate_name_conflicts(self):
        await connection_service.create_connection(ConnectionCreate(name="Main"))
        with pytest.raises(ConflictError) as exc_info:
            await connection_service.create_connection(ConnectionCreate(name="Main"))
        assert exc_info.value.field == "name"
        assert exc_info.value.message == "Connection name already exists"

    async def test_duplicate_port_conflicts(self):
        await connection_service.create_connection(ConnectionCreate(name="A", port=1502))
        with pytest.raises(ConflictError) as exc_info:
            await connection_service.create_connection(ConnectionCreate(name="B", port=1502))
        assert exc_info.value.field == "port"
        assert exc_info.value.message == "Port already in use"

    async def test_name_containing_port_is_not_mistaken_for_port_conflict(self):
        await connection_service.create_connection(ConnectionCreate(name="Report"))
        with pytest.raises(ConflictError) as exc_info:
            await connection_service.create_connection(ConnectionCreate(name="Report"))
        assert exc_info.value.field == "name"

    @pytest.mark.parametrize("name", ["", "   ", "x" * 101])
    async def test_bad_name(self, name):
        with pytest.raises(ValidationError) as exc_info:
            await connection_service.create_connection(ConnectionCreate(name=name))
        assert exc_info.value.field == "name"

    async def test_out_of_range_port(self):
        with pytest.raises(ValidationError) as exc_info:
            await connection_service.create_connection(ConnectionCreate(name="Main", port=70000))
        assert exc_info.value.field == "port"


class TestUpdateConnection:

    async def test_update_overwrites_fields(self):
        connection = await connection_service.create_connection(ConnectionCreate(name="Main"))
        updated = await connection_service.update_connection(
            connection.id,
            ConnectionUpdate(name="Renamed", port=1502, protocol_type=ProtocolType.TCP),
        )
        assert updated.id == connection.id
        assert updated.name == "Renamed"
        assert updated.port == 1502
        assert updated.protocol_type is ProtocolType.TCP

    async def test_keeping_own_port_is_not_a_conflict(self):
        connection = await connection_service.create_connection(ConnectionCreate(name="Main"))
        updated = await connection_service.update_connection(
            connection.id, ConnectionUpdate(name="Main", port=connection.port)
        )
        assert updated.port == connection.port

    async def test_port_of_another_connection_conflicts(self):
        first = await connection_service.create_connection(ConnectionCreate(name="First"))
        second = await connection_service.create_connection(ConnectionCreate(name="Second"))
        with pytest.raises(ConflictError) as exc_info:
            await connection_service.update_connection(
                second.id, ConnectionUpdate(name="Second", port=first.port)
            )
        assert exc_info.value.field == "port"

    async def test_name_of_another_connection_conflicts(self):
        await connection_service.create_connection(ConnectionCreate(name="First"))
        second = await connection_service.create_connection(ConnectionCreate(name="Second"))
        with pytest.raises(ConflictError) as exc_info:
            await connection_service.update_connection(
                second.id, ConnectionUpdate(name="First", port=second.port)
            )
        assert exc_info.value.field == "name"

    async def test_missing_connection(self):
        with pytest.raises(NotFoundError) as exc_info:
            await connection_service.update_connection("missing", ConnectionUpdate(name="X", port=1502))
        assert exc_info.value.field == "connection_id"

    async def test_validation_runs_before_lookup(self):
        with pytest.raises(ValidationError):
            await connection_service.update_connection("missing", ConnectionUpdate(name="X", port=0))

    async def test_blank_id(self):
        with pytest.raises(ValidationError) as exc_info:
            await connection_service.update_connection(" ", ConnectionUpdate(name="X", port=1502))
        assert exc_info.value.field == "connection_id"

    async def test_port_change_invalidates_old_and_new_endpoints(self, fake_redis):
        connection = await connection_service.create_connection(ConnectionCreate(name="Main"))
        await slave_service.create_slave(connection.id, SlaveCreate(name="Sensor", slave_address=1))
        await seed_cache(connection.port, 1)
        await seed_cache(1502, 1)

        await connection_service.update_connection(connection.id, ConnectionUpdate(name="Main", port=1502))

        assert cached_key(connection.port, 1) not in fake_redis.store
        assert cached_key(1502, 1) not in fake_redis.store


class TestDeleteConnection:

    async def test_delete_cascades(self):
        connection = await connection_service.create_connection(ConnectionCreate(name="Main"))
        slave = await slave_service.create_slave(connection.id, SlaveCreate(name="Sensor", slave_address=1))

        await connection_service.delete_connection(connection.id)

        assert await connection_service.get_connections_tree() == []
        with pytest.raises(NotFoundError):
            await slave_service.delete_slave(connection.id, slave.id)

    async def test_delete_missing(self):
        with pytest.raises(NotFoundError):
            await connection_service.delete_connection("missing")

    async def test_delete_invalidates_every_endpoint_first(self, fake_redis, monkeypatch):
        connection = await connection_service.create_connection(ConnectionCreate(name="Main"))
        for address in (1, 2):
            await slave_service.create_slave(
                connection.id, SlaveCreate(name=f"Slave {address}", slave_address=address)
            )
            await seed_cache(connection.port, address)

        store_delete = connections_db.delete_connection
        seen_at_delete = {}

        async def spy_delete(connection_id):
            seen_at_delete["keys"] = fake_redis.keys_matching("port_slave_registers")
            await store_delete(connection_id)

        monkeypatch.setattr(connections_db, "delete_connection", spy_delete)

        await connection_service.delete_connection(connection.id)

        assert seen_at_delete["keys"] == []

    async def test_delete_succeeds_when_redis_is_down(self, fake_redis):
        connection = await connection_service.create_connection(ConnectionCreate(name="Main"))
        await slave_service.create_slave(connection.id, SlaveCreate(name="Sensor", slave_address=1))
        fake_redis.fail = True

        await connection_service.delete_connection(connection.id)

        assert await connection_service.get_connections_tree() == []


class TestConnectionTree:

    async def test_tree_is_ordered(self):
        beta = await connection_service.create_connection(ConnectionCreate(name="Beta"))
        await connection_service.create_connection(ConnectionCreate(name="Alpha"))
        await slave_service.create_slave(beta.id, SlaveCreate(name="Ten", slave_address=10))
        await slave_service.create_slave(beta.id, SlaveCreate(name="Two", slave_address=2))

        tree = await connection_service.get_connections_tree()

        assert [connection.name for connection in tree] == ["Alpha", "Beta"]
        assert tree[0].slaves == []
        assert [slave.slave_address for slave in tree[1].slaves] == [2, 10]

    async def test_get_connection(self):
        connection = await connection_service.create_connection(ConnectionCreate(name="Main"))
        found = await connection_service.get_connection(connection.id)
        assert found.id == connection.id

        with pytest.raises(NotFoundError):
            await connection_service.get_connection("missing")
