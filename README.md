# panelkit

panelkit is the working core of a packet-sending workbench. It is a plain
Python library and needs nothing outside the standard library. It covers:

- **Panels**: named sets of buttons. Each button runs a short script made of
  saved packet names, delays and jumps to other panels. A panel can also
  carry a list of links.
- **Send scripts**: checking button scripts and running them.
- **Settings helpers**: server port lists, table column layouts, language
  choice and per-host HTTP headers.
- **Small tools**: POST form data, IPv4 subnet ranges and rendering of a
  connection's traffic view.

## Panels

`panelkit.panel` defines `Panel` and `PanelButton`. A panel whose id is 0 is
new, meaning it has not been saved yet. `PanelStore` keeps all panels in a
single JSON file:

```python
from panelkit.panel import Panel, PanelStore

store = PanelStore("panels.json")
panel = Panel(name="Lab bench")
panel.id = store.new_panel_id(store.fetch_all())
store.save(panel)

again = store.by_id(panel.id)
starter = store.launch_panel()
```

`save` sets the panel's modification time to now. If a stored panel has the
same id, `save` replaces it; otherwise it adds the panel. When the saved
panel is a launch panel, the stored panels that come before it lose their
launch flag. If it is a new panel, that means every stored panel. `by_id`,
`by_name` and `launch_panel` return an empty `Panel()` when nothing matches.

`new_panel_id` returns the lowest free id, starting from 1.

`export_json` and `import_json` convert lists of panels to and from the JSON
document format. Panels without a name and buttons without a title are not
exported. Input that is not a JSON array imports as an empty list.
`sort_by_id` returns the panels ordered by id.

## Scripts

A button script holds one command per line. Empty lines are skipped, and so
are lines that start with `//`, `#` or `;`. Each remaining line is one of:

- `sleep:N` or `delay:N`: wait N seconds. N must be at least 1.
- `panel:N`: when the script ends, switch to panel N.
- anything else: the name of a saved packet, which is sent.

```python
from panelkit.script import ScriptError, parse_script, run_script

try:
    steps = parse_script(text, panel_lookup, packet_lookup)
except ScriptError as err:
    print(err.messages)
else:
    panel_to_load = run_script(steps, send_packet, sleep)
```

`parse_script` checks the whole script before it raises, so a single
`ScriptError` lists every problem. `run_script` passes each packet name to
`send_packet` and pauses briefly after each one. It returns the id of the
panel to switch to, or 0 if there is none.

## Editing panels

`panelkit.editor` provides the operations a panel editor needs:

- `add_link`, `edit_link` and `delete_link` change a panel's links.
  `edit_link` and `delete_link` return `False` for an index that does not
  exist.
- `normalise_link_target` leaves URLs unchanged. It turns a file path, which
  may be wrapped in quotes, into its canonical path, and returns `""` for a
  path that does not exist.
- `buttons_from_edits` rebuilds the buttons from edited scripts and titles,
  both keyed by button id. It drops any button whose title is empty.
- `next_button_id` gives the id for a new button.
- `default_save_as_name` suggests a name for "save as".
- `merge_panels` merges imported panels into saved ones. With
  `overwrite=True`, an imported panel replaces the saved panel with the same
  id. Otherwise, an imported panel whose id is already taken gets the lowest
  free id.

## Settings

```python
from panelkit.settings import int_list_to_ports, ports_to_int_list

ports = ports_to_int_list("80, 443;8080")   # [80, 443, 8080]
text = int_list_to_ports(ports)              # "80, 443, 8080"
```

`validate_server_ports` raises `ValueError` when the same non-zero port is
set for both TCP and SSL. `resolve_table_headers`,
`default_packet_table_header` and `default_traffic_table_header` manage the
column layouts. `language_from_setting` maps a stored language name to one
of English, Spanish, German, French or Italian. `header_to_keyvalue` splits a
header line at its first colon.

`HttpHeaderStore` (in `panelkit.headers`) keeps extra HTTP headers for each
host in a JSON file. Saving a header replaces any earlier header for that
host with the same key. `basic_auth_header` builds an
`Authorization: Basic ...` header.

## Other tools

- `panelkit.postdata.PostData` parses a query string into key/value rows.
  Use `add`, `edit` and `remove` to change the rows, and `encode()` to get a
  percent-encoded string back.
- `panelkit.subnet` provides:
  - `mask_to_prefix`
  - `ipv4_range`, which returns a `SubnetRange` with the first, last and
    broadcast addresses (or `None` for an IPv6 address)
  - `find_containing`, which picks the first (address, netmask) entry whose
    subnet holds a given address

  Both `ipv4_range` and `find_containing` raise `ValueError` for invalid
  input.
- `panelkit.traffic` provides `TrafficEntry`, `CommandHistory`,
  `format_elapsed` (hh:mm:ss), `render_raw` and `render_html`, for a live
  connection view.

## What panelkit does not do

panelkit has no windows, no command-line program and no network code:

- It does not open sockets, run TCP or SSL servers, or send packets.
- It does not generate UDP traffic and does not compute send-rate figures.
- It does not keep a database of saved packets. Script lookups and packet
  sending are callables that you supply to `parse_script` and `run_script`.