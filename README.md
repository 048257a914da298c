# icefactory

A small ice-cream factory that shows three classic concurrency ideas:

* **Mutual exclusion**: every counter runs in its own thread, but only one
  counter at a time may be inside the critical region guarded by a shared lock.
* **Shared memory**: one command writes the counter names into a named shared
  memory segment, and another reads them back to drive a chosen number of
  counters.
* **TCP messaging**: a threaded server greets each connecting client and
  acknowledges every message it receives from it.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Commands

### The production line

```
icefactory [--rounds N] [--delay SECONDS]
```

Runs the five-counter line (Cone, Cream, Extra Topping, Special Flavor,
Distribution and Packaging) twice by default, with a 2-second delay at each
counter. Each counter holds the shared lock while it works, so the counters
print their progress one at a time. The last counter announces that the
ice-cream is ready.

### Shared-memory counters

First write the ten counter names into the shared segment:

```
icefactory-shm [--name SEGMENT]
```

The segment is named `icefactory-6166529` unless `--name` is given. It holds
a header of ten integer sizes followed by the NUL-terminated names. Remove it
again with:

```
icefactory-shm --remove [--name SEGMENT]
```

Then start the counters:

```
icefactory-counters [--segment SEGMENT] [--count N] [--delay SECONDS]
```

Without `--count`, the command asks for the number of counters (1 to 10) on
standard input. Each counter processes the name stored at its position in the
segment. A number outside the range, or input that is not a number, prints
`error`. Asking for five counters runs the first five and then the first six.
If the segment cannot be read, the command reports the error and exits with
status 1.

### TCP server and clients

Start the server. By default it listens on port 8888 on every interface:

```
icefactory-server [--host HOST] [--port PORT]
```

It prints `bind failed` if it cannot bind, and otherwise serves until
interrupted with Ctrl-C. Each accepted client gets a greeting and its own
handler thread, which sends a second greeting and answers every message with
an acknowledgement, printing the messages it receives.

In other terminals, connect one of the five clients by number:

```
icefactory-client 1
icefactory-client 5 --host 127.0.0.1 --port 8888 --linger 2
```

A client reads three replies from the server, sending its own introduction
before the second one, prints each reply, then waits `--linger` seconds
before closing.

## Library use

```python
import io
from icefactory.factory import build_line, run_factory
from icefactory.shm_layout import pack_names, unpack_names

out = io.StringIO()
run_factory(rounds=1, delay=0, out=out)
print(out.getvalue())

blob = pack_names(["Cone", "Cream"])
assert unpack_names(blob, 2) == ["Cone", "Cream"]
```

* `icefactory.stations.Station` describes one counter; `Station.messages`
  returns its entry and exit text and `Station.process` runs it under a lock.
  `run_stations` runs a list of stations against their items, one thread each.
* `icefactory.counters.run_counters` runs the first *n* of the ten counters
  from `counter_stations()`, with names passed in or read from shared memory.
* `icefactory.shm_layout` offers `write_segment`, `read_segment` and
  `remove_segment` for the named segment.
* `icefactory.server.FactoryServer` can be run with `serve_forever()` and
  stopped with `shutdown()`; `icefactory.client.run_client` returns the
  replies it received.

## Limits

The shared-memory table is at most ten names within a 2048-byte segment. The
server has no way to stop other than an interrupt or `FactoryServer.shutdown`,
and keeps no record of its clients beyond printing what they send.