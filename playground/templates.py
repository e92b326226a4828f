"""
Per-language replacement code attached to insights.
"""
from __future__ import annotations

from types import MappingProxyType

from .languages import Language
from .models import CodeSample

PY, JAVA, CPP, C, JS = Language.PYTHON, Language.JAVA, Language.CPP, Language.C, Language.JAVASCRIPT


MEMOIZATION = {
    PY: """# Optimized with memoization
def fibonacci(n, memo={}):
    if n in memo:
        return memo[n]
    if n <= 1:
        return n
    memo[n] = fibonacci(n-1, memo) + fibonacci(n-2, memo)
    return memo[n]""",
    JAVA: """// Optimized with memoization
public static long fibonacci(int n, Map<Integer, Long> memo) {
    if (memo.containsKey(n)) return memo.get(n);
    if (n <= 1) return n;
    memo.put(n, fibonacci(n-1, memo) + fibonacci(n-2, memo));
    return memo.get(n);
}""",
    CPP: """// Optimized with memoization
long long fibonacci(int n, std::unordered_map<int, long long>& memo) {
    if (memo.find(n) != memo.end()) return memo[n];
    if (n <= 1) return n;
    memo[n] = fibonacci(n-1, memo) + fibonacci(n-2, memo);
    return memo[n];
}""",
    C: """// Optimized with memoization (memo[] initialised to -1)
long long fibonacci(int n, long long memo[]) {
    if (memo[n] != -1) return memo[n];
    if (n <= 1) return n;
    memo[n] = fibonacci(n-1, memo) + fibonacci(n-2, memo);
    return memo[n];
}""",
    JS: """// Optimized with memoization
function fibonacci(n, memo = new Map()) {
  if (memo.has(n)) return memo.get(n);
  if (n <= 1) return n;
  const value = fibonacci(n - 1, memo) + fibonacci(n - 2, memo);
  memo.set(n, value);
  return value;
}""",
}

ITERATION = {
    PY: """# Iterative implementation
def fibonacci(n):
    if n <= 1:
        return n
    a, b = 0, 1
    for _ in range(2, n + 1):
        a, b = b, a + b
    return b""",
    JAVA: """// Iterative implementation
public static long fibonacci(int n) {
    if (n <= 1) return n;
    long a = 0, b = 1;
    for (int i = 2; i <= n; i++) {
        long c = a + b;
        a = b;
        b = c;
    }
    return b;
}""",
    CPP: """// Iterative implementation
long long fibonacci(int n) {
    if (n <= 1) return n;
    long long a = 0, b = 1;
    for (int i = 2; i <= n; i++) {
        long long c = a + b;
        a = b;
        b = c;
    }
    return b;
}""",
    C: """// Iterative implementation
long long fibonacci(int n) {
    if (n <= 1) return n;
    long long a = 0, b = 1;
    for (int i = 2; i <= n; i++) {
        long long c = a + b;
        a = b;
        b = c;
    }
    return b;
}""",
    JS: """// Iterative implementation
function fibonacci(n) {
  if (n <= 1) return n;
  let a = 0, b = 1;
  for (let i = 2; i <= n; i++) {
    [a, b] = [b, a + b];
  }
  return b;
}""",
}

DEPTH_GUARD = {
    PY: """# Guard against deep recursion
MAX_N = 900  # stays below the default recursion limit

def fibonacci(n):
    if n > MAX_N:
        raise ValueError(f"n={n} is too large for a recursive solution")
    if n <= 1:
        return n
    return fibonacci(n-1) + fibonacci(n-2)""",
    JAVA: """// Guard against deep recursion
public static long fibonacci(int n) {
    if (n > 40) {
        throw new IllegalArgumentException("n is too large for a recursive solution");
    }
    if (n <= 1) return n;
    return fibonacci(n-1) + fibonacci(n-2);
}""",
    CPP: """// Guard against deep recursion
long long fibonacci(int n) {
    if (n > 40) {
        throw std::invalid_argument("n is too large for a recursive solution");
    }
    if (n <= 1) return n;
    return fibonacci(n-1) + fibonacci(n-2);
}""",
    C: """// Guard against deep recursion
long long fibonacci(int n) {
    if (n > 40) {
        fprintf(stderr, "n is too large for a recursive solution\\n");
        return -1;
    }
    if (n <= 1) return n;
    return fibonacci(n-1) + fibonacci(n-2);
}""",
    JS: """// Guard against deep recursion
function fibonacci(n) {
  if (n > 40) {
    throw new RangeError("n is too large for a recursive solution");
  }
  if (n <= 1) return n;
  return fibonacci(n - 1) + fibonacci(n - 2);
}""",
}

EARLY_TERMINATION = {
    PY: """# Stop as soon as the answer is known
def contains_pair(arr, target):
    for i in range(len(arr)):
        for j in range(i + 1, len(arr)):
            if arr[i] + arr[j] == target:
                return True
    return False""",
    JAVA: """// Stop as soon as the answer is known
public static boolean containsPair(int[] arr, int target) {
    for (int i = 0; i < arr.length; i++) {
        for (int j = i + 1; j < arr.length; j++) {
            if (arr[i] + arr[j] == target) return true;
        }
    }
    return false;
}""",
    CPP: """// Stop as soon as the answer is known
bool containsPair(const std::vector<int>& arr, int target) {
    for (size_t i = 0; i < arr.size(); i++) {
        for (size_t j = i + 1; j < arr.size(); j++) {
            if (arr[i] + arr[j] == target) return true;
        }
    }
    return false;
}""",
    C: """// Stop as soon as the answer is known
int contains_pair(const int arr[], int n, int target) {
    for (int i = 0; i < n; i++) {
        for (int j = i + 1; j < n; j++) {
            if (arr[i] + arr[j] == target) return 1;
        }
    }
    return 0;
}""",
    JS: """// Stop as soon as the answer is known
function containsPair(arr, target) {
  for (let i = 0; i < arr.length; i++) {
    for (let j = i + 1; j < arr.length; j++) {
      if (arr[i] + arr[j] === target) return true;
    }
  }
  return false;
}""",
}

EDGE_CASE_GUARD = {
    PY: """# Guard clause for empty input
def total(arr):
    if not arr:
        return 0
    result = 0
    for value in arr:
        result += value
    return result""",
    JAVA: """// Guard clause for empty input
public static int total(int[] arr) {
    if (arr == null || arr.length == 0) return 0;
    int result = 0;
    for (int value : arr) {
        result += value;
    }
    return result;
}""",
    CPP: """// Guard clause for empty input
int total(const std::vector<int>& arr) {
    if (arr.empty()) return 0;
    int result = 0;
    for (int value : arr) {
        result += value;
    }
    return result;
}""",
    C: """// Guard clause for empty input
int total(const int *arr, int n) {
    if (arr == NULL || n <= 0) return 0;
    int result = 0;
    for (int i = 0; i < n; i++) {
        result += arr[i];
    }
    return result;
}""",
    JS: """// Guard clause for empty input
function total(arr) {
  if (!Array.isArray(arr) || arr.length === 0) return 0;
  let result = 0;
  for (const value of arr) {
    result += value;
  }
  return result;
}""",
}

PRE_ALLOCATION = {
    PY: """# Build the list in one pass instead of repeated append
squares = [i * i for i in range(n)]""",
    JAVA: """// Size the list up front
List<Integer> squares = new ArrayList<>(n);
for (int i = 0; i < n; i++) {
    squares.add(i * i);
}""",
    CPP: """// Reserve capacity before filling
std::vector<int> squares;
squares.reserve(n);
for (int i = 0; i < n; i++) {
    squares.push_back(i * i);
}""",
    C: """// Allocate the whole buffer once
int *squares = malloc(n * sizeof *squares);
if (squares == NULL) return -1;
for (int i = 0; i < n; i++) {
    squares[i] = i * i;
}""",
    JS: """// Allocate the array at its final length
const squares = Array.from({ length: n }, (_, i) => i * i);""",
}

FORMAT_OUTPUT = {
    PY: """# Formatted output
print(f"The result is: {result}")""",
    JAVA: """// Formatted output
System.out.printf("The result is: %d%n", result);""",
    CPP: """// Formatted output
std::cout << "The result is: " << result << std::endl;""",
    C: """// Formatted output
printf("The result is: %d\\n", result);""",
    JS: """// Formatted output
console.log(`The result is: ${result}`);""",
}

ENUMERATE = {
    PY: """# Iterate with enumerate instead of indexing
for i, value in enumerate(arr):
    print(i, value)""",
}

ENHANCED_FOR = {
    JAVA: """// Enhanced for loop
for (int value : arr) {
    System.out.println(value);
}""",
}

RESERVE = {
    CPP: """// Reserve once, then push_back without reallocations
std::vector<int> values;
values.reserve(n);
for (int i = 0; i < n; i++) {
    values.push_back(i);
}""",
}

LET_CONST = {
    JS: """// Block-scoped declarations
const values = [1, 2, 3];
for (let i = 0; i < values.length; i++) {
  console.log(values[i]);
}""",
}


TEMPLATES = MappingProxyType({
    "memoization": MappingProxyType(MEMOIZATION),
    "iteration": MappingProxyType(ITERATION),
    "depth_guard": MappingProxyType(DEPTH_GUARD),
    "early_termination": MappingProxyType(EARLY_TERMINATION),
    "edge_case_guard": MappingProxyType(EDGE_CASE_GUARD),
    "pre_allocation": MappingProxyType(PRE_ALLOCATION),
    "format_output": MappingProxyType(FORMAT_OUTPUT),
    "enumerate": MappingProxyType(ENUMERATE),
    "enhanced_for": MappingProxyType(ENHANCED_FOR),
    "reserve": MappingProxyType(RESERVE),
    "let_const": MappingProxyType(LET_CONST),
})


def code_sample(template: str, language: Language) -> CodeSample:
    """Build the code payload for ``template`` in ``language``."""
    return CodeSample(language=language, source=TEMPLATES[template][language])
