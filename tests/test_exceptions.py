from switchyard import (
    CoercionError,
    MissingArgumentError,
    Option,
    RepeatArgumentError,
    SwitchyardError,
    Token,
    TokenizationError,
    UnexpectedPositionalError,
    UnknownOptionError,
)


def test_msg_override():
    assert str(UnknownOptionError(msg="custom", token=Token(keyword="/x"))) == "custom"


def test_unknown_option_suggestion_respects_prefix():
    error = UnknownOptionError(token=Token(keyword="/strng"), candidates=("s", "string"), prefix="/")
    assert str(error) == 'Unknown option: "/strng". Did you mean "/string"?'


def test_unknown_option_verbose():
    error = UnknownOptionError(token=Token(keyword="/x", index=3), verbose=True)
    assert str(error) == 'Unknown option: "/x". (token #3)'


def test_coercion_error_positional():
    option = Option(field="count", type=int)
    error = CoercionError(option=option, token=Token(value="abc"), target_type=int)
    assert str(error) == 'Invalid value for "COUNT": unable to convert "abc" into int.'


def test_coercion_error_no_token():
    assert str(CoercionError(target_type=float)) == "Unable to convert value to float."


def test_missing_argument_required_option():
    option = Option("o", "output", field="output", required=True)
    assert str(MissingArgumentError(option=option)) == 'Missing required option "-output".'


def test_missing_argument_with_token():
    option = Option("o", "output", field="output")
    error = MissingArgumentError(option=option, token=Token(keyword="--OUTPUT"))
    assert str(error) == 'Option "--OUTPUT" requires an argument.'


def test_unexpected_positional():
    assert str(UnexpectedPositionalError(token=Token(value="extra"))) == 'Unexpected argument "extra".'


def test_repeat_argument_display_name_falls_back_to_option():
    option = Option("o", "output", field="output")
    assert str(RepeatArgumentError(option=option)) == 'Option "-output" specified multiple times; using the last value.'


def test_errors_are_switchyard_errors():
    for cls in (
        CoercionError,
        MissingArgumentError,
        RepeatArgumentError,
        TokenizationError,
        UnexpectedPositionalError,
        UnknownOptionError,
    ):
        assert issubclass(cls, SwitchyardError)
        assert issubclass(cls, Exception)


def test_tokenization_error():
    e = TokenizationError(command_line='a "b', reason="No closing quotation")
    assert str(e) == 'Malformed command line "a "b": no closing quotation.'
