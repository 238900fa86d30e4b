"""Tests for format-preserving POM property rewrites."""

import pytest

from errors import DocumentParseError, DocumentWriteFailure, PropertyNotFound
from pom import apply_edits, locate_properties, patch_document, read_document, write_document
from pom.files import detect_encoding
from versioning.models import PropertyEdit

POM = """<?xml version="1.0" encoding="UTF-8"?>
<!-- Licensed under the Apache License -->
<project xmlns="http://maven.apache.org/POM/4.0.0"
         xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance">
    <modelVersion>4.0.0</modelVersion>
  <groupId>io.confluent</groupId>
  <artifactId>common</artifactId>
  <version>6.0.1-1</version>

  <properties>
        <!-- kafka builds -->
        <ce.kafka.version>1.0.0</ce.kafka.version>
    <kafka.version   >1.0.0-ccs</kafka.version>
      <java.version>11</java.version>
      <empty.value/>
  </properties>

  <dependencies>
    <dependency>
      <groupId>org.apache.kafka</groupId>
      <artifactId>kafka-clients</artifactId>
      <version>${kafka.version}</version>
    </dependency>
  </dependencies>

  <profiles>
    <profile>
      <id>other</id>
      <properties>
        <kafka.version>9.9.9</kafka.version>
      </properties>
    </profile>
  </profiles>
</project>
"""


def test_locate_properties_only_at_project_level():
    data = POM.encode("utf-8")
    locations = locate_properties(data)
    names = [loc.name for loc in locations]
    assert names == ["ce.kafka.version", "kafka.version", "java.version", "empty.value"]
    ce = locations[0]
    assert data[ce.start:ce.end] == b"1.0.0"
    assert locations[3].empty
    assert data[locations[3].start:locations[3].end] == b"<empty.value/>"


def test_edit_changes_only_the_value():
    result = apply_edits(POM, [PropertyEdit("ce.kafka.version", "2.0.0")])
    assert result.ok
    assert result.text == POM.replace(
        "<ce.kafka.version>1.0.0</ce.kafka.version>", "<ce.kafka.version>2.0.0</ce.kafka.version>"
    )


def test_edits_apply_in_order():
    result = apply_edits(POM, [
        PropertyEdit("ce.kafka.version", "6.0.1-12-ce"),
        PropertyEdit("kafka.version", "6.0.1-1-ccs"),
    ])
    expected = POM.replace("<ce.kafka.version>1.0.0<", "<ce.kafka.version>6.0.1-12-ce<") \
        .replace("<kafka.version   >1.0.0-ccs<", "<kafka.version   >6.0.1-1-ccs<")
    assert result.text == expected
    # Profile-scoped and dependency references stay untouched.
    assert "<kafka.version>9.9.9</kafka.version>" in result.text
    assert "<version>${kafka.version}</version>" in result.text


def test_missing_property_stops_the_batch():
    original = str(POM)
    result = apply_edits(POM, [
        PropertyEdit("ce.kafka.version", "2.0.0"),
        PropertyEdit("no.such.property", "1"),
        PropertyEdit("kafka.version", "3.0.0"),
    ])
    assert not result.ok
    assert result.missing_property == "no.such.property"
    assert result.text is None
    assert POM == original


def test_patch_document_raises_on_missing_property():
    with pytest.raises(PropertyNotFound) as exc:
        patch_document(POM, [PropertyEdit("ce.version", "1")])
    assert exc.value.name == "ce.version"


def test_self_closing_property_gets_a_value():
    result = patch_document(POM, [PropertyEdit("empty.value", "x")])
    assert "<empty.value>x</empty.value>" in result
    assert result.replace("<empty.value>x</empty.value>", "<empty.value/>") == POM


def test_value_is_escaped():
    result = patch_document(POM, [PropertyEdit("java.version", "a<b&c")])
    assert "<java.version>a&lt;b&amp;c</java.version>" in result


def test_non_ascii_and_crlf_preserved():
    doc = ("<?xml version=\"1.0\"?>\r\n<project>\r\n  <name>Zürich ✓</name>\r\n"
           "  <properties>\r\n    <ce.kafka.version>1</ce.kafka.version>\r\n  </properties>\r\n</project>\r\n")
    result = patch_document(doc, [PropertyEdit("ce.kafka.version", "2")])
    assert result == doc.replace("<ce.kafka.version>1<", "<ce.kafka.version>2<")


def test_property_containing_comment_is_replaced_whole():
    doc = "<project><properties><v><!-- pinned -->1</v></properties></project>"
    assert patch_document(doc, [PropertyEdit("v", "2")]) == "<project><properties><v>2</v></properties></project>"


def test_malformed_document():
    with pytest.raises(DocumentParseError):
        apply_edits("<project><properties><v>1</properties></project>", [PropertyEdit("v", "2")])


def test_detect_encoding():
    assert detect_encoding(b'<?xml version="1.0" encoding="ISO-8859-1"?><project/>') == "ISO-8859-1"
    assert detect_encoding(b"<project/>") == "UTF-8"
    assert detect_encoding(b'<?xml version="1.0" encoding="no-such-codec"?>') == "UTF-8"


def test_detect_encoding_byte_order_marks():
    decl = '<?xml version="1.0" encoding="UTF-16"?><project/>'
    assert detect_encoding(b"\xff\xfe" + decl.encode("utf-16-le")) == "UTF-16"
    assert detect_encoding(b"\xfe\xff" + decl.encode("utf-16-be")) == "UTF-16"
    assert detect_encoding(b"\xff\xfe\x00\x00" + "<project/>".encode("utf-32-le")) == "UTF-32"
    assert detect_encoding(b"\x00\x00\xfe\xff" + "<project/>".encode("utf-32-be")) == "UTF-32"


def test_utf16_document_is_patched(tmp_path):
    source = tmp_path / "pom.xml"
    text = ('<?xml version="1.0" encoding="UTF-16"?>\n<project>\n'
            '<properties><kafka.version>1</kafka.version></properties>\n</project>\n')
    source.write_bytes(text.encode("utf-16"))

    read, encoding = read_document(str(source))
    assert encoding == "UTF-16"
    assert read == text

    target = tmp_path / "installed-pom.xml"
    write_document(str(target), patch_document(read, [PropertyEdit("kafka.version", "2")]), encoding)
    assert target.read_bytes().decode("utf-16") == text.replace(">1<", ">2<")


def test_bytes_not_matching_declared_encoding(tmp_path):
    source = tmp_path / "pom.xml"
    source.write_bytes(b'<?xml version="1.0" encoding="UTF-8"?><project><name>caf\xe9</name></project>')
    with pytest.raises(UnicodeDecodeError):
        read_document(str(source))


def test_read_and_write_keep_bytes(tmp_path):
    source = tmp_path / "pom.xml"
    raw = ('<?xml version="1.0" encoding="ISO-8859-1"?>\r\n<project>\r\n<name>caf\xe9</name>\r\n'
           '<properties><kafka.version>1</kafka.version></properties>\r\n</project>\r\n').encode("latin-1")
    source.write_bytes(raw)

    text, encoding = read_document(str(source))
    assert encoding == "ISO-8859-1"
    patched = patch_document(text, [PropertyEdit("kafka.version", "2")])

    target = tmp_path / "installed-pom.xml"
    write_document(str(target), patched, encoding)
    assert target.read_bytes() == raw.replace(b"<kafka.version>1<", b"<kafka.version>2<")


def test_write_failure(tmp_path):
    with pytest.raises(DocumentWriteFailure) as exc:
        write_document(str(tmp_path / "missing" / "pom.xml"), "<project/>")
    assert isinstance(exc.value.cause, OSError)
