# curvemanager

A small Python client for the metadata service (MDS) of a distributed block
storage cluster. It speaks to the MDS over HTTP and turns its JSON replies
into plain Python dataclasses.

## What it covers

- **Topology** (`curvemanager.topology.TopologyMixin`): physical pools,
  logical pools, zones, servers, chunkservers and copysets
  (`list_physical_pool`, `list_logical_pool`, `get_logical_pool`,
  `list_pool_zone`, `list_zone_server`, `list_chunk_server`,
  `get_chunk_server_in_cluster`, `get_copysets_in_chunk_server`,
  `get_chunk_server_list_in_copysets`, `get_copysets_in_cluster`).
  Retired chunkservers are left out of chunkserver listings, and
  `list_logical_pool` queries every physical pool in parallel threads.
- **Namespace** (`curvemanager.namespace.NamespaceMixin`): files and
  directories (`list_dir`, `get_file_info`, `get_file_size`,
  `get_file_allocated_size`, `create_file`, `extend_file`, `delete_file`,
  `recover_file`, `update_file_throttle_params`, `find_file_mount_point`).
- **Messages**: `curvemanager.nameserver2`, `curvemanager.topology_proto` and
  `curvemanager.protocommon` hold the reply types, each with a `from_dict`
  class method that builds it from decoded JSON; missing fields take zero or
  default values.
- **Helpers** in `curvemanager.common`: `max_uint64`, `min_uint32`,
  `get_md5_sum32_little`, `get_rand_string`, `get_ip_from_endpoint` (raises
  `ValueError` for anything not of the form `ip:port`), `mill_to_time_str`
  and `new_http_session`.

Sizes that the MDS reports in bytes are given back in whole GiB, and
timestamps are formatted as `YYYY-MM-DD HH:MM:SS` in local time.

## Usage

Build a client from a configuration mapping. The `mds.address` key holds a
comma-separated list of MDS endpoints; `init` tries them in order, keeps the
first that answers an HTTP request (or the whole list if none does), stores
the client in `curvemanager.mds.GMdsClient` and returns it.

```python
from curvemanager.mds import init

client = init({"mds.address": "127.0.0.1:6700,127.0.0.1:6701"})

for pool in client.list_physical_pool():
    print(pool.id, pool.name)

for pool in client.list_logical_pool():
    print(pool.name, pool.type, pool.allocate_status, pool.create_time)
```

Or construct the client yourself:

```python
from curvemanager.mds import MdsClient, MdsClientOption

option = MdsClientOption(timeout_ms=500, retry_times=3, addrs=["127.0.0.1:6700"])
client = MdsClient(option)
print(client.get_file_size("/volume1"))
```

Each request is sent to the configured endpoints in turn, with
`timeout_ms` as the timeout, and the first endpoint that answers is used.
`retry_times` is kept on the client but requests are not repeated.

## Errors

- `curvemanager.basehttp.HttpError` is raised when no endpoint could be
  reached, or the endpoint list is empty; its message lists the failure of
  every endpoint tried, and its `errors` attribute maps each endpoint to its
  exception.
- `curvemanager.basehttp.MdsError` is raised when the MDS answers with a
  non-success status code; the message is the status code's name, such as
  `kFileNotExists` or `LogicalPoolNotFound`. From `list_logical_pool` the
  message is prefixed with the physical pool id that failed.
- A reply that is not valid JSON, or whose fields have the wrong types,
  raises `ValueError` or `TypeError`.

## Status codes

```python
from curvemanager.nameserver2 import status_code_name
from curvemanager.statuscode import topo_status_name

status_code_name(102)   # "kFileNotExists"
topo_status_name(-10)   # "LogicalPoolNotFound"
```

Unknown codes give an empty string.

## What it does not do

This package is only the client side. It has no HTTP server or web API of
its own, no command-line program, no user accounts, login or permission
checks, no alerting or system log, no storage of its own, and no deployment
of hosts, disks or clusters. It does not talk to etcd, chunkservers or the
snapshot-clone service directly, and it does not gather performance metrics.