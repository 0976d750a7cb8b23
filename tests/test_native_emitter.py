from collections.abc import Callable

import pytest

from napi_binding_generator.emitters.native_emitter import NativeEmitter, call_argument
from napi_binding_generator.emitters.registration_emitter import RegistrationEmitter
from napi_binding_generator.models import (
    Argument,
    EmitterConfig,
    MethodSignature,
    WrapperCacheRef,
)
from napi_binding_generator.type_registry import DEFAULT_REGISTRY
from napi_binding_generator.utils import TemplateRenderer

Parse = Callable[[str], MethodSignature]


@pytest.fixture
def emitter(renderer: TemplateRenderer) -> NativeEmitter:
    return NativeEmitter(renderer)


def _lines(text: str) -> list[str]:
    return [line.strip() for line in text.splitlines()]


def test_integer_operation_body(emitter: NativeEmitter, parse: Parse) -> None:
    body = emitter.emit_body("Foo", parse("int add(int a, int b)"))

    assert body == "\n".join(
        [
            "",
            "Napi::Value FooWrap::add(const Napi::CallbackInfo& info) {",
            "  Napi::Env env = info.Env();",
            "  Napi::HandleScope scope(env);",
            "",
            "  if (info.Length() != 2) {",
            '    Napi::TypeError::New(env, "Wrong number of arguments")',
            "        .ThrowAsJavaScriptException();",
            "    return env.Null();",
            "  }",
            "  int a = info[0].As<Napi::Number>().Int32Value();",
            "  int b = info[1].As<Napi::Number>().Int32Value();",
            "  int result = this->instance->add(a, b);",
            "  return Napi::Number::New(env, result);",
            "}",
        ]
    )


def test_declaration_and_registration_share_name(emitter: NativeEmitter, parse: Parse) -> None:
    sig = parse("int add(int a, int b)")

    assert emitter.emit_declaration(sig) == "  Napi::Value add(const Napi::CallbackInfo& info);"
    assert RegistrationEmitter().emit("Foo", sig) == '    InstanceMethod("add", &FooWrap::add),'


def test_registration_respects_wrapper_suffix(parse: Parse) -> None:
    config = EmitterConfig(wrapper_suffix="Binding")

    line = RegistrationEmitter(config).emit("QWidget", parse("void show()"))

    assert line == '    InstanceMethod("show", &QWidgetBinding::show),'


def test_void_result_returns_null(emitter: NativeEmitter, parse: Parse) -> None:
    body = emitter.emit_body("Foo", parse("void clear()"))

    assert body.endswith("  this->instance->clear();\n  return env.Null();\n}")
    assert "info.Length() != 0" in body


@pytest.mark.parametrize(
    ("signature", "expected"),
    [
        ("void setEnabled(bool enabled)", "bool enabled = info[0].As<Napi::Boolean>().Value();"),
        ("void glEnable(GLenum cap)", "GLenum cap = info[0].As<Napi::Number>().Int32Value();"),
        ("void glBindVertexArray(GLuint array)", "GLuint array = info[0].As<Napi::Number>().Uint32Value();"),
        ("void glLineWidth(GLfloat width)", "GLfloat width = info[0].As<Napi::Number>().FloatValue();"),
        ("void setOpacity(qreal opacity)", "qreal opacity = info[0].As<Napi::Number>().DoubleValue();"),
        (
            "void setFocusPolicy(Qt::FocusPolicy policy)",
            "Qt::FocusPolicy policy = static_cast<Qt::FocusPolicy>(info[0].As<Napi::Number>().Int32Value());",
        ),
    ],
)
def test_scalar_extraction(emitter: NativeEmitter, parse: Parse, signature: str, expected: str) -> None:
    assert expected in _lines(emitter.emit_body("Foo", parse(signature)))


def test_string_argument_and_result(emitter: NativeEmitter, parse: Parse) -> None:
    lines = _lines(emitter.emit_body("QLabel", parse("QString replace(const QString &text)")))

    assert "std::string textNapiText = info[0].As<Napi::String>().Utf8Value();" in lines
    assert "QString text = QString::fromStdString(textNapiText);" in lines
    assert "QString result = this->instance->replace(text);" in lines
    assert "return Napi::String::New(env, result.toStdString());" in lines


def test_value_object_argument_is_dereferenced(emitter: NativeEmitter, parse: Parse) -> None:
    lines = _lines(emitter.emit_body("QWidget", parse("void setGeometry(const QRect &rect)")))

    assert "Napi::Object rectObject = info[0].As<Napi::Object>();" in lines
    assert "QRectWrap* rectWrap = Napi::ObjectWrap<QRectWrap>::Unwrap(rectObject);" in lines
    assert "QRect* rect = rectWrap->getInternalInstance();" in lines
    assert "this->instance->setGeometry(*rect);" in lines


def test_pointer_object_argument_is_passed_as_is(emitter: NativeEmitter, parse: Parse) -> None:
    lines = _lines(emitter.emit_body("QWidget", parse("void setParent(QWidget *parent, int x)")))

    assert "QWidget* parent = parentWrap->getInternalInstance();" in lines
    assert "int x = info[1].As<Napi::Number>().Int32Value();" in lines
    assert "this->instance->setParent(parent, x);" in lines


@pytest.mark.parametrize("token", DEFAULT_REGISTRY.argument_tokens)
def test_call_argument_dereferences_exactly_when_flagged(token: str) -> None:
    spec = DEFAULT_REGISTRY.resolve_argument_type(token)
    expected = "*value" if spec.needs_dereference else "value"

    assert call_argument(Argument(type=spec, name="value")) == expected


def test_owned_object_result_builds_one_new_wrapper(emitter: NativeEmitter, parse: Parse) -> None:
    body = emitter.emit_body("QWidget", parse("QRect geometry() const"))

    assert body.count("constructor.New(") == 1
    assert "  QRect result = this->instance->geometry();" in body
    assert (
        "  auto resultInstance = QRectWrap::constructor.New("
        "{Napi::External<QRect>::New(env, new QRect(result))});"
    ) in body
    assert "  return resultInstance;" in body


def test_object_list_result_wraps_each_element(emitter: NativeEmitter, parse: Parse) -> None:
    lines = _lines(emitter.emit_body("QItemSelectionModel", parse("QModelIndexList selectedIndexes()")))

    assert "QModelIndexList result = this->instance->selectedIndexes();" in lines
    assert "Napi::Array resultArrayNapi = Napi::Array::New(env, result.size());" in lines
    assert (
        "resultArrayNapi[i] = QModelIndexWrap::constructor.New("
        "{Napi::External<QModelIndex>::New(env, new QModelIndex(result[i]))});"
    ) in lines
    assert lines[-2:] == ["return resultArrayNapi;", "}"]


def test_pass_through_result_uses_wrapper_cache(emitter: NativeEmitter, parse: Parse) -> None:
    lines = _lines(emitter.emit_body("QPushButton", parse("QMenu *menu() const")))

    assert "QMenu* result = this->instance->menu();" in lines
    assert "if (result) {" in lines
    assert "return WrapperCache::instance.getWrapper(env, static_cast<QObject*>(result));" in lines
    assert lines[-2:] == ["return env.Null();", "}"]


def test_pass_through_result_uses_configured_cache(renderer: TemplateRenderer, parse: Parse) -> None:
    config = EmitterConfig(wrapper_cache=WrapperCacheRef(native_lookup="registry.lookup"))
    emitter = NativeEmitter(renderer, config=config)

    body = emitter.emit_body("QWidget", parse("QWidget *parentWidget()"))

    assert "return registry.lookup(env, static_cast<QObject*>(result));" in body
    assert "WrapperCache::instance" not in body


@pytest.mark.parametrize(
    ("signature", "expected"),
    [
        ("bool isVisible()", "return Napi::Boolean::New(env, result);"),
        ("GLboolean glIsEnabled(GLenum cap)", "return Napi::Boolean::New(env, result);"),
        ("Qt::Alignment alignment()", "return Napi::Number::New(env, static_cast<uint>(result));"),
        ("Qt::Orientation orientation()", "return Napi::Number::New(env, result);"),
        ("double value()", "return Napi::Number::New(env, result);"),
    ],
)
def test_scalar_result_packing(emitter: NativeEmitter, parse: Parse, signature: str, expected: str) -> None:
    assert expected in _lines(emitter.emit_body("Foo", parse(signature)))


def test_native_method_name_is_never_transformed(emitter: NativeEmitter, parse: Parse) -> None:
    sig = parse("void glClearColor(GLclampf red, GLclampf green, GLclampf blue, GLclampf alpha)")
    body = emitter.emit_body("QOpenGLExtraFunctions", sig)

    assert "Napi::Value QOpenGLExtraFunctionsWrap::glClearColor(" in body
    assert "  this->instance->glClearColor(red, green, blue, alpha);" in body
