# stunkit

Networking building blocks for writing STUN clients and servers in Python.
It collects the pieces such programs need around the protocol itself.

## Modules

- **`stunkit.stunsocket`**: `StunSocket` owns one UDP or TCP socket.
  `udp_init(local, role)` and `tcp_init(local, role, reuse)` create and bind it
  (IPv6 sockets are set to IPv6-only). The `role` value is stored as given.
  `local_address` and `remote_address` are refreshed by `update_addresses()`.
  `enable_pktinfo_option(enable)` asks the kernel to report the destination
  address of received packets, and `set_non_blocking(enable)` switches blocking
  mode. The class also provides `attach`, `detach`, `is_valid` and `close`, and
  it works as a context manager. The socket object itself is `StunSocket.sock`.
- **`stunkit.recvfromex`**: `recvfromex(sock, bufsize, flags)` receives one
  datagram and returns a `Datagram` with `data`, `source` and `destination`.
  The destination is the local address and port the packet arrived on. It is
  the unspecified address with port 0 when no packet information was delivered.
- **`stunkit.polling`**: `Poller` is based on `poll()` and `EpollPoller` on
  `epoll()`, which needs Linux. Both offer `add`, `remove`, `change_event_set`
  and `wait_for_next_event(timeout_ms)`. The last returns one `PollEvent` at a
  time, or `None` on timeout. Flags are `PollFlag` values and failures raise
  `PollingError`. `create_polling_instance(kind, max_sockets)` builds either
  poller from a `PollingType`. `BEST` chooses epoll where it is available.
- **`stunkit.adapters`**: `list_adapters()` returns the IPv4 and IPv6 addresses
  of the local interfaces as `Adapter` records. It reads them through `psutil`.
  `default_adapters` and `has_at_least_two_adapters` find the first two
  interfaces that are up and are not loopback. `best_address_for_socket_bind`
  suggests the primary or alternate bind address for a server.
  `socket_address_for_adapter` and `find_adapter_address` map an interface name
  or IP string to a bindable address. These functions raise
  `AdapterNotFoundError` when nothing matches.
- **`stunkit.resolvehostname`**: `resolve_host_name(host, family, numeric_only)`
  and `numeric_ip_to_address(family, ip)` return socket-module address tuples
  with port 0. They raise `ResolveError` on failure and `ValueError` on bad input.
- **`stunkit.fasthash`**: `FastHash` is a fixed-capacity hash table with
  positional access through `item_at`, `value_at` and `items()`.
  - `insert` raises `OverflowError` when the table is full.
  - `remove` raises `KeyError` for a missing key.
  - `lookup` returns `None` for a missing key.

  The module also has `find_prime` and `get_hash_table_width`.
- **`stunkit.cmdlineparser`**: `CommandLineParser` handles long options given
  with `-name` or `--name` (unique prefixes are accepted) and named positionals.
  `parse(argv, start_index)` returns a `ParseResult` with `options`, `arguments`
  and an `error` flag. `ArgMode` says whether an option takes a value.
- **`stunkit.prettyprint`**: `pretty_print(text, width, file)` and
  `format_pretty` word-wrap text to a width and keep each paragraph's indent.
- **`stunkit.logger`**: `set_log_level`, `get_log_level` and
  `log_msg(level, fmt, *args)` print printf-style messages to stdout when the
  level is enabled. `LogLevel` names the levels.
- **`stunkit.oshelper`**: `get_console_width()` returns the terminal width, or
  80 when it is unknown. `get_millisecond_counter()` returns a wrapping 32-bit
  millisecond counter.
- **`stunkit.stringhelper`**: `trim`, `to_lower`, `is_null_or_empty`,
  `parse_leading_int` and `validate_number_string`.

Requires Python 3.10 or later and `psutil`.

## What it does not do

stunkit does not encode or decode STUN messages. It does not run NAT behaviour
or filtering tests, and it contains no STUN server. It installs no command-line
program. It provides the socket, polling, address and console pieces that such
programs are built from.

## Examples

Bind a UDP socket and receive a packet together with its destination address:

```python
from stunkit.recvfromex import recvfromex
from stunkit.stunsocket import StunSocket

with StunSocket() as stun:
    stun.udp_init(("0.0.0.0", 3478))
    stun.enable_pktinfo_option(True)
    datagram = recvfromex(stun.sock, 1500, 0)   # blocks until a packet arrives
    print(datagram.source, datagram.destination, len(datagram.data))
```

Poll several descriptors and handle events one at a time:

```python
from stunkit.polling import PollFlag, PollingType, create_polling_instance

with create_polling_instance(PollingType.BEST, 10) as poller:
    poller.add(sock.fileno(), PollFlag.READ)
    event = poller.wait_for_next_event(500)
    if event is not None:
        print(event.fd, event.flags)
```

Wrap usage text to the terminal:

```python
from stunkit.oshelper import get_console_width
from stunkit.prettyprint import pretty_print

pretty_print(usage_text, get_console_width() - 2, None)
```

Parse a command line:

```python
from stunkit.cmdlineparser import ArgMode, CommandLineParser

parser = CommandLineParser()
parser.add_non_option("server")
parser.add_option("mode", ArgMode.REQUIRED)
parser.add_option("help", ArgMode.NONE)
result = parser.parse(["prog", "--mode", "full", "stun.example.com"], 1)
# result.options["mode"] == "full", result.arguments["server"] == "stun.example.com"
```

## Running the tests

Install the `test` extra and run `pytest` from the project directory.