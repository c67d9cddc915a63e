import pytest
from authorized_keys import (
    Comment, FileParseError, InvalidBase64Padding, Key, KeyAuthorization, KeyType, KeysFile,
    MissingEncodedKey, MissingKeyType, ParserConfig, PublicKey, UnrecognizedKeyType,
    parse_authorization, parse_keys_file, parse_line, parse_option, parse_options,
)
from authorized_keys.parser import is_comment_line

ED25519 = "AAAAC3NzaC1lZDI1NTE5AAAAIGgqo1o+dOHqeIc7A5MG53s5iYwpMQm7f3hnn+uxtHUM"


# ---------------------------
# Options
# ---------------------------
def test_parse_bare_option():
    assert parse_option("restrict") == ("restrict", None)


def test_parse_valued_option():
    assert parse_option('from="127.0.0.1"') == ("from", "127.0.0.1")
    assert parse_option('command=""') == ("command", "")


def test_option_value_keeps_escapes():
    assert parse_option(r'command="echo \"hi\""') == ("command", r'echo \"hi\"')


def test_option_value_too_short():
    assert parse_option("command=") == ("command", None)
    assert parse_option("command=x") == ("command", None)


def test_parse_options_list():
    assert parse_options('restrict,command="uptime ",no-agent-forwarding') == [
        ("restrict", None),
        ("command", "uptime "),
        ("no-agent-forwarding", None),
    ]
    assert parse_options(None) == []
    assert parse_options("") == []
    # stray commas do not produce nameless options
    assert parse_options("restrict,") == [("restrict", None)]


# ---------------------------
# Lines
# ---------------------------
def test_parses_a_minimal_key():
    key = parse_authorization("ssh-ed25519 AAAAtHUM")
    assert key == KeyAuthorization(
        options=[],
        key=PublicKey(KeyType.SSH_ED25519, "AAAAtHUM"),
        comments="",
    )


def test_parses_a_value_option():
    key = parse_authorization('command="echo hello" ssh-ed25519 AAAAtHUM')
    assert key.options == [("command", "echo hello")]
    assert key.key_type is KeyType.SSH_ED25519


def test_parses_a_name_option():
    key = parse_authorization("no-agent-forwarding ssh-ed25519 AAAA")
    assert key.options == [("no-agent-forwarding", None)]


def test_comment_through_consecutive_spaces():
    key = parse_authorization("ssh-ed25519   AAAA   hello, world!")
    assert key.encoded_key == "AAAA"
    assert key.comments == "hello, world!"


def test_tabs_separate_fields():
    key = parse_authorization("restrict\tssh-ed25519\tAAAA\tme@host")
    assert key.options == [("restrict", None)]
    assert key.comments == "me@host"


def test_parses_a_complex_line():
    line = r'no-agent-forwarding,command="echo \"hello\"",restrict ssh-ed25519 AAAAtHUM comment value here'
    key = parse_authorization(line)

    assert key.options == [
        ("no-agent-forwarding", None),
        ("command", r'echo \"hello\"'),
        ("restrict", None),
    ]
    assert key.key_type is KeyType.SSH_ED25519
    assert key.encoded_key == "AAAAtHUM"
    assert key.comments == "comment value here"


def test_quoted_spaces_stay_in_options():
    key = parse_authorization('command="ls -la /tmp",from="10.0.0.1" ssh-rsa AAAA')
    assert key.options == [("command", "ls -la /tmp"), ("from", "10.0.0.1")]


def test_duplicate_options_keep_order():
    key = parse_authorization('environment="A=1",environment="B=2" ssh-ed25519 AAAA')
    assert key.options == [("environment", "A=1"), ("environment", "B=2")]
    assert key.get_options("environment") == ["A=1", "B=2"]
    assert key.has_option("environment")
    assert not key.has_option("restrict")


def test_key_type_is_case_insensitive():
    assert parse_authorization("SSH-RSA AAAA").key_type is KeyType.SSH_RSA


def test_every_key_type_parses():
    for kt in KeyType:
        assert parse_authorization(f"{kt} {ED25519}").key_type is kt


def test_comments_may_contain_anything():
    key = parse_authorization('ssh-ed25519 AAAA "quoted" and, commas=1 ')
    assert key.comments == '"quoted" and, commas=1'


def test_leading_whitespace_and_crlf():
    key = parse_authorization("  ssh-ed25519 AAAA user\r\n")
    assert key.encoded_key == "AAAA"
    assert key.comments == "user"


def test_two_unknown_tokens_are_fatal():
    with pytest.raises(UnrecognizedKeyType) as exc:
        parse_authorization("not-a-keytype also-not-a-keytype AAAA")
    assert exc.value.token == "also-not-a-keytype"


def test_missing_key_type():
    with pytest.raises(MissingKeyType):
        parse_authorization("restrict AAAA")
    with pytest.raises(MissingKeyType):
        parse_authorization("AAAA")


def test_missing_encoded_key():
    with pytest.raises(MissingEncodedKey):
        parse_authorization("ssh-ed25519")
    with pytest.raises(MissingEncodedKey):
        parse_authorization("restrict ssh-ed25519 ")


def test_base64_not_checked_by_default():
    key = parse_authorization("ssh-ed25519 unpaddedvalue")
    assert key.encoded_key == "unpaddedvalue"


def test_strict_base64():
    strict = ParserConfig(strict_base64=True)
    assert parse_authorization("ssh-ed25519 foobar== hi", strict).encoded_key == "foobar=="
    with pytest.raises(InvalidBase64Padding):
        parse_authorization("ssh-ed25519 unpaddedvalue", strict)
    with pytest.raises(InvalidBase64Padding):
        parse_authorization("ssh-ed25519 twoequalsatmo===", strict)


def test_classmethod_parse():
    assert KeyAuthorization.parse("ssh-ed25519 AAAA") == parse_authorization("ssh-ed25519 AAAA")


# ---------------------------
# Comment lines and files
# ---------------------------
def test_comment_classification():
    for line in ["", "   ", "\t", "# hi", "   # indented"]:
        assert is_comment_line(line), repr(line)
        assert parse_line(line) == Comment(line)
    assert isinstance(parse_line("ssh-ed25519 AAAA"), Key)


def test_parses_a_file_with_comment_lines():
    keys_file = parse_keys_file("# hello, world!\n\nssh-ed25519 AAAAtHUM")
    assert keys_file.lines == [
        Comment("# hello, world!"),
        Comment(""),
        Key(KeyAuthorization(key=PublicKey(KeyType.SSH_ED25519, "AAAAtHUM"))),
    ]


def test_empty_file_has_no_lines():
    assert parse_keys_file("").lines == []
    assert parse_keys_file("\n").lines == [Comment("")]


def test_file_line_endings():
    keys_file = parse_keys_file("ssh-rsa AAAA a\r\n# c\r\nssh-dss BBBB b\n")
    assert len(keys_file) == 3
    assert [k.comments for k in keys_file.keys()] == ["a", "b"]
    assert keys_file.lines[1] == Comment("# c")


def test_bad_line_fails_whole_file(caplog):
    text = "# ok\nssh-ed25519 AAAA\nbogus also-bogus AAAA\nssh-rsa AAAA\n"
    with pytest.raises(FileParseError) as exc:
        parse_keys_file(text)

    assert exc.value.lineno == 3
    assert isinstance(exc.value.cause, UnrecognizedKeyType)
    assert exc.value.__cause__ is exc.value.cause
    assert "line 3" in str(exc.value)
    assert "line 3 rejected" in caplog.text


def test_keys_file_classmethod_parse():
    keys_file = KeysFile.parse("ssh-ed25519 AAAA\n")
    assert list(keys_file.keys())[0].encoded_key == "AAAA"
