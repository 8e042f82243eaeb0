"""Test fixtures for unbundle tests.

This module provides sample Go sources and helpers to lay them out on disk
as single files or packages.
"""

from pathlib import Path

# One exported function, one unexported function, one type with a method and
# one const block.
WIDGET_SOURCE = '''package widgets

import (
	"fmt"
	"strings"

	"github.com/pkg/errors"
)

// MaxSize is the largest widget.
const (
	MaxSize = 10
	MinSize = 1
)

// Widget is a thing that speaks.
type Widget struct {
	Name string
}

// Speak prints the widget name.
func (w *Widget) Speak() {
	fmt.Println(strings.ToUpper(w.Name))
}

// Foo builds a widget.
func Foo() (*Widget, error) {
	if bar() {
		return nil, errors.New("no widget")
	}
	return &Widget{Name: "foo"}, nil
}

func bar() bool { return false }
'''

WIDGET_CONST_TEXT = '''// MaxSize is the largest widget.
const (
	MaxSize = 10
	MinSize = 1
)'''

WIDGET_TYPE_TEXT = '''// Widget is a thing that speaks.
type Widget struct {
	Name string
}'''

WIDGET_SPEAK_TEXT = '''// Speak prints the widget name.
func (w *Widget) Speak() {
	fmt.Println(strings.ToUpper(w.Name))
}'''

WIDGET_FOO_TEXT = '''// Foo builds a widget.
func Foo() (*Widget, error) {
	if bar() {
		return nil, errors.New("no widget")
	}
	return &Widget{Name: "foo"}, nil
}'''

WIDGET_BAR_TEXT = 'func bar() bool { return false }'

WIDGET_HEADER = '''package widgets

import (
	"fmt"
	"strings"

	"github.com/pkg/errors"
)

'''

# A second file of the widgets package, sorted before widget.go.
HELPERS_SOURCE = '''package widgets

import (
	"fmt"

	log "github.com/sirupsen/logrus"
)

// Describe returns a description.
func (w Widget) Describe() string {
	return fmt.Sprintf("widget %s", w.Name)
}

var registry = map[string]*Widget{} // by name

func helper() {
	log.Info("helper")
}
'''

HELPERS_DESCRIBE_TEXT = '''// Describe returns a description.
func (w Widget) Describe() string {
	return fmt.Sprintf("widget %s", w.Name)
}'''

HELPERS_REGISTRY_TEXT = 'var registry = map[string]*Widget{} // by name'

GROUPED_TYPES_SOURCE = '''package shapes

// Shapes of the world.
type (
	// Circle is round.
	Circle struct {
		R float64
	}
	Square struct{ S float64 }
	ID = string
)

func (c Circle) Area() float64 { return 3.14 * c.R * c.R }

func (s *Square) Area() float64 { return s.S * s.S }
'''

GROUPED_LOOSE_COMMENTS_SOURCE = '''package shapes

type (
	A int

	// Detached from any spec.

	B string
	// After the last spec.
) // closing the group
'''

# Distinct keys that share a file name once snake cased.
SAME_FILE_NAME_SOURCE = '''package names

type FooBar int

type Foo_Bar string
'''

ROLE_NAME_SOURCE = '''package names

type PrivateFns int

func helper() {}
'''

GENERIC_SOURCE = '''package lists

import "sync"

// List is a guarded list.
type List[T any] struct {
	mu    sync.Mutex
	items []T
}

// Push appends an item.
func (l *List[T]) Push(item T) {
	l.mu.Lock()
	defer l.mu.Unlock()
	l.items = append(l.items, item)
}

func (l List[T]) Len() int { return len(l.items) }
'''

COLLIDING_SOURCE = '''package clash

type Foo struct{}

func (f Foo) Upper() {}

type foo struct{}

func (f foo) lower() {}
'''

MULTIPLE_RECEIVERS_SOURCE = '''package broken

type T struct{}

func (a, b *T) Twice() {}
'''

QUALIFIED_RECEIVER_SOURCE = '''package broken

func (t other.T) Foreign() {}
'''

SYNTAX_ERROR_SOURCE = '''package broken

func Broken( {
'''

UNRESOLVED_SOURCE = '''package loose

func Uses() int {
	return undefinedHelper(missing.Value)
}
'''


def write_go_file(directory: Path, name: str, content: str) -> Path:
    """Write a Go source file, creating ``directory`` as needed."""
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / name
    path.write_text(content, encoding='utf-8')
    return path


def write_package(directory: Path, files: dict[str, str]) -> Path:
    """Write every file of ``files`` into ``directory`` and return it."""
    for name, content in files.items():
        write_go_file(directory, name, content)
    return directory
