"""Tests for the MetaCatalog facade."""

from sqlalchemy import inspect

from metacatalog import MetaCatalog, Partition
from metacatalog.config import CatalogConfig


def test_init_creates_table():
    mc = MetaCatalog("sqlite://", table_name="facade_md").init()
    try:
        assert mc.schema.table_exists() is True
        assert mc.rows.table_name == "facade_md"
        assert mc.partitions.get_all_partitions() == set()
    finally:
        mc.close()


def test_context_manager_round_trip():
    with MetaCatalog("sqlite://", table_name="md") as mc:
        assert mc.partitions.add_partition(Partition(1, "train")) is True
        assert mc.rows.insert("run", "owner", "train", "alice") is True
        assert mc.partitions.get_partition_by_name("train") == Partition(1, "train")
        assert mc.rows.lookup("run", "owner", "train") == "alice"


def test_reopen_warms_cache(tmp_path):
    url = f"sqlite:///{tmp_path / 'meta.db'}"
    with MetaCatalog(url, table_name="md") as mc:
        mc.partitions.add_partition(Partition(3, "a"))
        mc.partitions.add_partition(Partition(5, "b"))

    with MetaCatalog(url, table_name="md") as mc:
        assert mc.partitions.cached_names == {"a": 3, "b": 5}
        assert mc.partitions.get_max_partition() == 5


def test_settings_from_config(tmp_path):
    config = CatalogConfig(
        database_url=f"sqlite:///{tmp_path / 'cfg.db'}",
        table_name="from_config",
        echo=False,
        log_level="WARNING",
    )
    mc = MetaCatalog(config=config)
    assert mc.table_name == "from_config"
    assert mc.database_url == config.database_url

    explicit = MetaCatalog(table_name="explicit", config=config)
    assert explicit.table_name == "explicit"


def test_from_connection_leaves_connection_open(db_conn):
    mc = MetaCatalog.from_connection(db_conn, "borrowed").init()
    mc.partitions.add_partition(Partition(1, "a"))
    mc.close()

    assert db_conn.closed is False
    assert inspect(db_conn).has_table("borrowed")
