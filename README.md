# swaprouter

Building blocks for a cross-chain swap router: hex encoding with a `0x`
prefix, 256-bit integer arithmetic, Keccak-256 hashes, checksummed
account addresses, levelled logging and a small on-disk key-value store.

## Installation

```
pip install .
```

To add the test dependencies, install with `pip install .[test]`.

## Modules

- `swaprouter.hexutil` has `encode`, `decode`, `encode_uint64`,
  `decode_uint64`, `encode_big` and `decode_big`. Every decoding error
  subclasses `HexDecodeError`, which is itself a `ValueError`. Examples are
  `MissingPrefixError`, `OddLengthError`, `LeadingZeroError` and
  `Big256RangeError`.
- `swaprouter.hexjson` has `HexBytes`, `HexBig`, `HexUint64` and `HexUint`.
  Each has `to_text`, `to_json`, `from_text` and `from_json`. A JSON value
  that is not a string, or that holds invalid hex, raises
  `UnmarshalTypeError`. The functions `unmarshal_fixed_text`,
  `unmarshal_fixed_unprefixed_text` and `unmarshal_fixed_json` decode values
  of a fixed size.
- `swaprouter.bigmath` has `parse_big256`, `parse_uint64` and `parse_int`.
  For 256-bit arithmetic it has `u256`, `s256` and `exp`. The checked 64-bit
  operations `safe_add`, `safe_sub` and `safe_mul` each return a pair of
  (result, overflowed). Byte helpers are `padded_big_bytes`, `read_bits`,
  `byte_at` and `big_endian_byte_at`. It also has `HexOrDecimal256` and
  `HexOrDecimal64`, which accept hex or decimal text and write hex.
- `swaprouter.bytesutil` has `to_hex` and `from_hex`, where `from_hex`
  accepts an optional prefix and an odd number of digits. It also has
  `is_hex`, `hex_to_bytes_fixed`, `left_pad_bytes`, `right_pad_bytes` and
  related helpers.
- `swaprouter.hashes` has `Hash`, a 32-byte value, and `UnprefixedHash`,
  along with `keccak256_hash`, `is_hex_hash` and `EMPTY_HASH`.
- `swaprouter.address` has `Address`, a 20-byte value whose `hex()` returns
  the EIP-55 mixed-case checksum form. It also has `UnprefixedAddress`,
  `MixedcaseAddress` (which keeps the original string and can check its
  checksum) and `is_hex_address`.
- `swaprouter.bigtext` has `marshal_big_int` and `unmarshal_big_int`. The
  second reads decimal, `0x`, `0b`, `0o` or leading-zero octal.
- `swaprouter.storagesize` has `StorageSize`, a float that prints as
  B, KiB, MiB, GiB or TiB.
- `swaprouter.utils` has `get_big_int_from_str`, `get_int_from_str` and
  `get_uint64_from_str`, the timestamps `now`, `now_milli` and their string
  forms, `to_json_string`, and slicing helpers `get_data`, `get_big_int` and
  `get_uint64`.
- `swaprouter.paths` has `absolute_path`, `file_exist`, `execute_dir`,
  `current_dir` and `make_name`.
- `swaprouter.logger` provides levelled logging with key/value fields,
  written as text (optionally coloured) or as JSON. Use `set_logger` to
  choose the level and format. `set_log_file` writes JSON to files that
  rotate by the hour. `with_fields` attaches fields to an entry. After
  logging, `fatal` raises `SystemExit(1)` and `panic` raises `LogPanic`.
- `swaprouter.kvstore` has `Database`, a byte-key/byte-value store. It keeps
  its data in an SQLite file inside the directory it is given. It offers
  `get`, which raises `NotFoundError` for a missing key, plus `put`,
  `delete` and `has`. `iterate(prefix, start)` yields pairs in key order.
  It also has `stat`, `compact`, and `Batch` and `HookedBatch` for buffered
  writes.

## Example

```python
from swaprouter.address import Address
from swaprouter.hashes import keccak256_hash
from swaprouter.hexutil import decode_big, encode_big
from swaprouter.kvstore import Database

addr = Address.from_hex("0x5aaeb6053f3e94c9b9a09f33669435e7ef1beaed")
print(addr.hex())                       # checksummed form
print(keccak256_hash(b"").hex())
print(encode_big(decode_big("0x2F2")))  # 0x2f2

with Database("/tmp/example-db") as db:
    db.put(b"k1", b"v1")
    print(list(db.iterate(b"k")))       # [(b'k1', b'v1')]
```

## What this package does not do

This package is a library of helpers only. It has no command-line program
and does not run a swap router, an RPC server or background workers. It
does not sign or verify admin transactions. It has no chain, token or swap
configuration, and no storage of swap records beyond the generic
key-value store in `swaprouter.kvstore`.

## Tests

```
pytest
```