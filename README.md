# ezcfgmigrate

`ezcfgmigrate` converts configuration files written for the old 0.x
generation of the streaming source client into the structured 1.x XML
format. The 1.x format has an `<ezstream>` root element and sections for
servers, streams, intakes, decoders, encoders and metadata. The package
can also read 1.x files into an in-memory configuration and write one out
again.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Command-line use

```
ezstream-cfgmigrate [-hv] -0 v0-cfgfile
```

| Option          | Meaning                                            |
|-----------------|----------------------------------------------------|
| `-0 v0-cfgfile` | migrate from the given 0.x configuration file      |
| `-h`            | print help and exit                                |
| `-v`            | increase logging verbosity (give it twice for more)|

The new configuration goes to standard output, after an XML declaration
and a comment that names the source file. Redirect it into a file:

```
ezstream-cfgmigrate -0 old.xml > new.xml
```

Problems found in the old file are logged to standard error:

* Errors in the old file itself stop the run with exit status 1. Examples
  are malformed XML, repeated elements, out-of-range numbers, and bad
  placeholders in `<metadata_format>`, `<encode>` or `<decode>`.
* Some values cannot be carried over to the new format. These are
  reported as warnings and left out. For example, an encoder or decoder
  without a required setting is dropped.
* If the result would not be a usable configuration, nothing is written
  and the exit status is 1. The result is unusable when it has no
  hostname, no password, no stream format, or no intake filename.
* A usage error, such as an unknown option or a missing `-0`, gives exit
  status 2.

### What gets converted

* `<url>` becomes the server hostname, the server port and the stream
  mountpoint. It must have the form `http://host:port/mount`.
* `<sourceuser>` and `<sourcepassword>` become the server credentials.
* `<format>` becomes the stream format. `VORBIS` and `THEORA` map to `Ogg`.
* `<filename>`, `<playlist_program>`, `<shuffle>` and `<stream_once>`
  become the intake settings. A filename of `stdin` selects the stdin
  intake type.
* `<reconnect_tries>` becomes the server's reconnect attempts.
* `<metadata_progname>`, `<metadata_format>` and
  `<metadata_refreshinterval>` become the metadata section.
* The `<svrinfo*>` elements become the stream information fields.
* `<reencode>` sets the stream's encoder, and each `<encdec>` entry
  becomes a named encoder and/or decoder. Decoders keep their file
  extension matches.

## Library use

```python
from ezcfgmigrate.config import Config
from ezcfgmigrate.legacy_parser import parse_legacy_file
from ezcfgmigrate.migrate import convert
from ezcfgmigrate.xmlrender import render

legacy = parse_legacy_file("old.xml")
config = Config()
warnings = convert(legacy, config, "old.xml")
print(render(config))
```

Other entry points:

* `ezcfgmigrate.xmlrender.write(config, fp)` writes the document to an
  open text file.
* `ezcfgmigrate.xmlload.load(config, path)` reads an existing 1.x file
  into a `Config`. It first checks with `ezcfgmigrate.config.check_file`
  that the file exists and is not world writeable.
* `ezcfgmigrate.xmlload.reload(config, path)` does the same as `load`,
  but puts the previous contents back if loading fails.

Each entry type has its own module:

* `server.Server`
* `stream.Stream`
* `intake.Intake`
* `encoder.Encoder`
* `decoder.Decoder`

Each of them takes settings as text through `apply(key, value)` and checks
itself with `validate()`. `Decoder` is the exception: it uses
`set_program` for its program, and `DecoderList.add_match` for file
extensions.

All rejected values and failed checks raise
`ezcfgmigrate.values.ConfigError`.

## What this package does not do

It only reads, converts and writes configuration files. It does not
stream audio, connect to a server, or run encoder, decoder or metadata
programs.