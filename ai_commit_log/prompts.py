SYSTEM_PROMPT = (
    "You are an expert software engineer with mastery over Linux internals, "
    "systems programming, architecture, and git conventions. Your responses are concise, "
    "technically accurate, and focused on reasoning and implications, adhering strictly to "
    "specified formatting rules."
)

# Order matters: the model is asked to pick the first prefix that applies.
COMMIT_PREFIXES = ("feature", "fix", "refactor", "chore")

COMMIT_PROMPT = """\
Generate a Git commit log (subject line and detailed body) based on the provided patch.
Adhere STRICTLY and PRECISELY to ALL the following rules:

**Overall Structure:**
1.  A subject line.
2.  A single blank line.
3.  A detailed message body.

**Subject Line Rules:**
*   **Prefix:** MUST start with ONE of following prefixes, by priority (highest first):
    1. `feature`: If any new functionality is added, regardless of other changes.
    2. `fix`: If no features are added, but bugs are corrected.
    3. `refactor`: If no features or fixes, on code restructuring or improvements.
    4. `chore`: If only maintenance, build process, tooling, or trivial change is present.
*   **Case:** MUST be entirely lowercase.
*   **Length:** MUST NOT exceed 80 chars total (including prefix and separating space).
*   **Tense:** MUST use the imperative mood (e.g., 'fix bug', 'add feature').
*   **Punctuation:** MUST NOT end with a period.

**Message Body Rules:**
*   **Content Focus:** Provide a technical, detailed description focusing ONLY on the
    *purpose*, *reasoning*, *causes*, *effects*, and *technical implications* of the
    changes. Explain *why* the change is necessary.
*   **Detail Level:** Avoid summarizing the diff or listing implementation details (like
    specific variable/function names) unless absolutely essential for understanding the
    core logic or impact. Do NOT include non-technical summaries or conversational text.
*   **Tense:** MUST use the imperative mood consistently. Avoid past tense (e.g., use
    'Introduce X' not 'Introduced X').
*   **Line Formatting (CRITICAL):**
    * Wrap ALL text (subject and body) strictly at 80 columns maximum per line.
    * Every line in the message body MUST start with a uppercase letter.
    * Every line in the message body MUST end with a period.
*   **Bullet Points (Use for multiple distinct points):**
    * Use a hyphen (`-`) followed by a single space for bullets.
    * The text immediately following the bullet MUST start with a lowercase letter.
    * Each complete bullet point (which might span multiple wrapped lines) MUST end with
      a period.
    * Subsequent lines belonging to the same bullet point MUST be indented to align
      vertically with the first letter *after* the hyphen and space.

**Example Body Snippet (Illustrating Formatting):**

```text
fix : addresses potential race conditions in the caching layer.

- Introduce a fine-grained locking mechanism for cache updates. Previously,
  concurrent writes could lead to inconsistent state under heavy load,
  causing intermittent data corruption for users.

- Modify the cache eviction policy to better handle frequently accessed
  items. This prevents premature eviction of critical data points during
  peak usage periods.

- Update relevant unit tests to cover the new locking behavior and
  eviction logic. Ensures regressions are caught early.
```

**Final Output:**
Produce ONLY the formatted commit message (subject and body). Do NOT include any
introductory phrases, explanations, apologies, or markdown code fences (like ```) around
the output.

The patch to analyze follows:"""
