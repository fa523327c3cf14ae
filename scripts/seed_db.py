"""Seed the database with two connections, their slaves and registers."""

from __future__ import annotations

import asyncio

from modbus_simulator.config import settings
from modbus_simulator.db.connection import close_async_engine, init_db
from modbus_simulator.cache.connection import close_redis_client
from modbus_simulator.helpers import connections as connection_service
from modbus_simulator.helpers import registers as register_service
from modbus_simulator.helpers import slaves as slave_service
from modbus_simulator.logger import get_logger, setup_logging
from modbus_simulator.schemas.db_models import ProtocolType
from modbus_simulator.schemas.db_models.models import ConnectionCreate, RegisterCreate, SlaveCreate

setup_logging(log_level=settings.log_level)
logger = get_logger(__name__)

SEED_CONNECTIONS = [
    {
        "name": "seed-rtu",
        "protocol_type": ProtocolType.RTU_OVER_TCP,
        "slaves": [
            {
                "name": "seed-meter",
                "slave_address": 1,
                "registers": [
                    {"start_address": 1, "hex_payload": "A5", "names": "breaker_closed", "coefficients": ""},
                    {"start_address": 10001, "hex_payload": "0F", "names": "alarm_bits", "coefficients": ""},
                    {"start_address": 30001, "hex_payload": "09C4", "names": "frequency", "coefficients": "0.02"},
                    {
                        "start_address": 40001,
                        "hex_payload": "00780079007A",
                        "names": "ia,ib,ic",
                        "coefficients": "0.1,0.1,0.1",
                    },
                ],
            },
            {
                "name": "seed-relay",
                "slave_address": 2,
                "registers": [
                    {"start_address": 40101, "hex_payload": "0001", "names": "trip_count", "coefficients": "1"},
                ],
            },
        ],
    },
    {
        "name": "seed-tcp",
        "protocol_type": ProtocolType.TCP,
        "slaves": [
            {
                "name": "seed-inverter",
                "slave_address": 10,
                "registers": [
                    {"start_address": 30101, "hex_payload": "0FA00FA1", "names": "p_ac,q_ac", "coefficients": "1,1"},
                ],
            },
        ],
    },
]


async def seed_db() -> None:
    await init_db()
    existing = {connection.name for connection in await connection_service.get_connections_tree()}

    for connection_data in SEED_CONNECTIONS:
        if connection_data["name"] in existing:
            logger.info("Seed connection already exists (%s)", connection_data["name"])
            continue

        connection = await connection_service.create_connection(
            ConnectionCreate(name=connection_data["name"], protocol_type=connection_data["protocol_type"])
        )
        logger.info("Created seed connection %s on port %s", connection.name, connection.port)

        for slave_data in connection_data["slaves"]:
            slave = await slave_service.create_slave(
                connection.id,
                SlaveCreate(name=slave_data["name"], slave_address=slave_data["slave_address"]),
            )
            for register_data in slave_data["registers"]:
                await register_service.create_register(connection.id, slave.id, RegisterCreate(**register_data))
            logger.info("Created seed slave %s with %s registers", slave.name, len(slave_data["registers"]))


async def main() -> None:
    try:
        await seed_db()
    finally:
        await close_redis_client()
        await close_async_engine()


if __name__ == "__main__":
    asyncio.run(main())
