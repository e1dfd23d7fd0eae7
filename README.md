# chainregistry

Building blocks for maintaining a registry of rollup chains.

## What is in it

- **`chainregistry.types`**: `Address` (20 bytes) and `Hash` (32 bytes).
  `from_text` parses `0x`-prefixed hex and raises `ValueError` on a bad
  length, prefix or hex digit. An empty string gives the zero hash.
  `to_text` prints lower-case `0x` hex.
- **`chainregistry.params`**: `ConfigParams` and its nested parameter classes.
  `parse_config_params` works on TOML text and `load_config_params` on a file.
  `Range.within_range(v)` checks an inclusive bound. Keys that are missing keep
  their zero values.
- **`chainregistry.roles`**: `RolesConfig`, with `parse_roles_config` and
  `load_roles_config`.
- **`chainregistry.prestates`**: `Prestates` and `Prestate`, with
  `parse_prestates` and `load_prestates`. Both raise `ValueError` unless the
  latest RC and latest stable releases are listed.
  `Prestates.stable_prestate()` returns the first prestate of the latest
  stable release.
- **`chainregistry.versions`**: `Semver`, `ContractData` and `VersionConfig`,
  with `parse_versions` and `load_versions`. These return a mapping from
  release tag to `VersionConfig`. `is_valid_contract_semver` recognises the
  releases listed in `Semver`.
- **`chainregistry.paths`**: finds and checks locations in a registry checkout.
  - `find_repo_root` and `find_repo_root_from_dir` walk upwards to a
    directory holding a `.repo-root` marker. They raise `FileNotFoundError`
    if there is none.
  - `staging_dir`, `superchain_dir`, `chain_config`, `superchain_config`,
    `genesis_file`, `addresses_file`, `validations_file` and the other path
    helpers build paths.
  - `require_dir`, `require_root` and `ensure_dir` check for or create
    directories.
  - `collect_files` with `file_ext_matcher` lists files under a directory,
    walking it in lexical order.
- **`chainregistry.files`**: reads and writes files.
  - `read_toml_file` reads a TOML file.
  - `read_json_file` reads a JSON file. Files ending in `.gz` are gunzipped
    first.
  - `write_toml_file` writes TOML.
  - `atomic_write` writes through a temporary file and then renames it into
    place.
- **`chainregistry.report`**: report record classes (`L1Report`, `L2Report`,
  `Report` and their parts). It also holds `Account` and `diff_allocs(a, b)`,
  which compares two genesis allocations. The result is a list of
  `AccountDiff` values for added, removed and changed accounts, with storage
  changes sorted by key. `AccountDiff.as_markdown()` renders one diff as
  `+`/`-` lines, with a checksummed address.
- **`chainregistry.matchers`**: parameter matchers for JSON-RPC requests.
  - `any_params_matcher` accepts any parameters.
  - `null_matcher` accepts only absent or `null` parameters.
  - `json_params_matcher` compares JSON text and ignores insignificant
    whitespace.
- **`chainregistry.mockrpc`**: `MockRPC`, a scripted JSON-RPC server. It
  answers requests, single or batched, from a queue of `RPCCall`
  expectations. `load_expectations` reads those expectations from a JSON
  file.
  - The first mismatch records `NoMatchingCallsError`. Running out of calls
    records `NoMoreCallsError`. Every later request is answered with the
    recorded error.
  - `handle(body)` answers a request body directly.
  - `start`/`stop`, or a `with` block, serve it over HTTP on a free
    localhost port.
  - `assert_expectations()` raises the recorded error. If any expected calls
    were never made, it raises `PendingCallsError` instead.
- **`chainregistry.once`**: `OnceValue`, a thread-safe holder that keeps the
  first value passed to `set()` in its `value` attribute.

## Installation

```
pip install .
```

## Examples

```python
from chainregistry.types import Address
from chainregistry.params import parse_config_params

addr = Address.from_text("0x1234567890123456789012345678901234567890")
print(addr.to_text())

params = parse_config_params("""
[rollup_config]
block_time = [2, 2]
""")
print(params.rollup_config.block_time.within_range(2))  # True
```

Diffing two allocations:

```python
from chainregistry.report import Account, diff_allocs
from chainregistry.types import Address

addr = Address.from_text("0x0000000000000000000000000000000000000001")
old = {addr: Account(code=b"\x01", balance=100, nonce=1)}
new = {addr: Account(code=b"\x02", balance=100, nonce=1)}
for diff in diff_allocs(old, new):
    print(diff.as_markdown())
```

Serving scripted RPC responses in a test:

```python
from chainregistry.mockrpc import MockRPC, RPCCall

with MockRPC([RPCCall(method="eth_chainId", result="0x1")]) as rpc:
    url = rpc.endpoint()
    ...  # point a client at url and make the call
    rpc.assert_expectations()
```

## What it does not do

- The package does not ship the standard parameter, role, prestate or
  version files. You pass the path or the TOML text yourself.
- It does not talk to a live chain, so it cannot scan deployed contracts.
- It does not build a standard genesis; `diff_allocs` compares allocations
  that you supply.
- It does not render a report as a comment.
- It has no command-line tool.

## Running the tests

```
pip install .[test]
pytest
```